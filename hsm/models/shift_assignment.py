"""
ShiftAssignment model - binds a user to a shift template on a calendar date
"""
import uuid
from datetime import datetime


def create_shift_assignment_model(db):
    """Factory function to create ShiftAssignment model with db instance"""

    class ShiftAssignment(db.Model):
        """
        Shift assignment

        Created only through ShiftAssignmentService after convention
        validation passes. The (user_id, shift_id, date) unique constraint
        is the authoritative duplicate guard.
        """
        __tablename__ = 'shift_assignments'

        id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
        user_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False)
        shift_id = db.Column(db.String(36), db.ForeignKey('shifts.id'), nullable=False)
        date = db.Column(db.Date, nullable=False)
        created_by_id = db.Column(db.String(36), db.ForeignKey('users.id'))
        created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

        __table_args__ = (
            db.UniqueConstraint('user_id', 'shift_id', 'date', name='unique_user_shift_date'),

            # Week-window and adjacency lookups
            db.Index('idx_shift_assignments_user_date', 'user_id', 'date'),
        )

        # Relationships
        user = db.relationship('User', foreign_keys=[user_id], backref='shift_assignments', lazy=True)
        shift = db.relationship('Shift', backref='assignments', lazy='joined')
        created_by = db.relationship('User', foreign_keys=[created_by_id], lazy=True)

        def to_dict(self):
            return {
                'id': self.id,
                'userId': self.user_id,
                'shiftId': self.shift_id,
                'date': self.date.isoformat(),
                'createdById': self.created_by_id,
                'createdAt': self.created_at.isoformat() if self.created_at else None,
                'shift': self.shift.to_dict() if self.shift else None,
                'user': self.user.to_summary() if self.user else None,
            }

        def __repr__(self):
            return f'<ShiftAssignment {self.id}: Shift {self.shift_id} -> User {self.user_id} on {self.date}>'

    return ShiftAssignment
