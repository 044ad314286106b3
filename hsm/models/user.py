"""
User model
Represents hospital staff (doctors, nurses) and administrators
"""
import uuid
from datetime import datetime
from enum import Enum


class Role(str, Enum):
    """Account roles"""
    ADMIN = "ADMIN"
    DOCTOR = "DOCTOR"
    NURSE = "NURSE"


def create_user_model(db):
    """Factory function to create User model with db instance"""

    class User(db.Model):
        """
        User model representing schedulable staff members and administrators

        Attributes:
            id: UUID string
            username: Unique login name
            role: ADMIN, DOCTOR or NURSE
            is_active: Inactive users cannot receive new assignments
            department: Department name (staff only)
            section: Section within the department (staff only)
        """
        __tablename__ = 'users'

        id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
        username = db.Column(db.String(100), nullable=False, unique=True)
        role = db.Column(db.String(20), nullable=False, default=Role.NURSE.value)
        is_active = db.Column(db.Boolean, nullable=False, default=True)
        department = db.Column(db.String(100))
        section = db.Column(db.String(100))
        created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

        __table_args__ = (
            db.Index('idx_users_active', 'is_active'),
            db.Index('idx_users_role', 'role'),
        )

        @property
        def is_admin(self):
            return self.role == Role.ADMIN.value

        def to_summary(self):
            """Compact representation embedded in other payloads"""
            return {'id': self.id, 'username': self.username, 'role': self.role}

        def __repr__(self):
            return f'<User {self.id}: {self.username} ({self.role})>'

    return User
