"""
Convention models
Free-text scheduling rules and their links to users
"""
import uuid
from datetime import datetime
from enum import Enum


class ConventionType(str, Enum):
    """Category of a convention"""
    AVAILABILITY = "AVAILABILITY"
    RESTRICTION = "RESTRICTION"
    LEGAL = "LEGAL"
    MEDICAL = "MEDICAL"
    CUSTOM = "CUSTOM"


class SelectionType(str, Enum):
    """Who linked a convention to a user"""
    ADMIN_ASSIGNED = "ADMIN_ASSIGNED"
    USER_SELECTED = "USER_SELECTED"


def create_convention_models(db):
    """Factory function to create convention models with db instance"""

    class Convention(db.Model):
        """
        A free-text rule such as "No Night Shifts" or "Maximum 40 Hours per Week"

        Deactivated conventions are ignored by validation but kept so past
        assignment decisions stay explainable.
        """
        __tablename__ = 'conventions'

        id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
        title = db.Column(db.String(200), nullable=False)
        description = db.Column(db.Text)
        type = db.Column(db.String(20), nullable=False, default=ConventionType.CUSTOM.value)
        is_active = db.Column(db.Boolean, nullable=False, default=True)
        created_by_id = db.Column(db.String(36), db.ForeignKey('users.id'))
        created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
        updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

        __table_args__ = (
            db.Index('idx_conventions_active', 'is_active'),
            db.Index('idx_conventions_type', 'type'),
        )

        def to_dict(self):
            return {
                'id': self.id,
                'title': self.title,
                'description': self.description,
                'type': self.type,
                'isActive': self.is_active,
            }

        def __repr__(self):
            return f'<Convention {self.id}: {self.title}>'

    class UserConvention(db.Model):
        """
        Link between a user and a convention

        At most one link exists per (user, convention). ADMIN_ASSIGNED links
        can only be removed by an administrator.
        """
        __tablename__ = 'user_conventions'

        id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
        user_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False)
        convention_id = db.Column(db.String(36), db.ForeignKey('conventions.id'), nullable=False)
        selection_type = db.Column(db.String(20), nullable=False, default=SelectionType.ADMIN_ASSIGNED.value)
        assigned_by_id = db.Column(db.String(36), db.ForeignKey('users.id'))
        assigned_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

        __table_args__ = (
            db.UniqueConstraint('user_id', 'convention_id', name='unique_user_convention'),
            db.Index('idx_user_conventions_user', 'user_id'),
        )

        convention = db.relationship('Convention', backref='user_conventions', lazy='joined')
        user = db.relationship('User', foreign_keys=[user_id], backref='user_conventions', lazy=True)
        assigned_by = db.relationship('User', foreign_keys=[assigned_by_id], lazy=True)

        def to_dict(self):
            return {
                'id': self.id,
                'userId': self.user_id,
                'conventionId': self.convention_id,
                'selectionType': self.selection_type,
                'assignedById': self.assigned_by_id,
                'assignedAt': self.assigned_at.isoformat() if self.assigned_at else None,
                'convention': self.convention.to_dict() if self.convention else None,
            }

        def __repr__(self):
            return f'<UserConvention {self.user_id} -> {self.convention_id} ({self.selection_type})>'

    return Convention, UserConvention
