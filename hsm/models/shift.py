"""
Shift model - reusable time-of-day template
"""
import uuid
from datetime import datetime
from enum import Enum


class ShiftType(str, Enum):
    REGULAR = "REGULAR"
    OVERTIME = "OVERTIME"
    EMERGENCY = "EMERGENCY"
    ON_CALL = "ON_CALL"


class ShiftStatus(str, Enum):
    SCHEDULED = "SCHEDULED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    NO_SHOW = "NO_SHOW"


def create_shift_model(db):
    """Factory function to create Shift model with db instance"""

    class Shift(db.Model):
        """
        Shift template

        Only the time-of-day of start_time/end_time is meaningful; the date
        part is whatever reference date the template was created with.
        An end time-of-day at or before the start means the shift runs
        past midnight.
        """
        __tablename__ = 'shifts'

        id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
        title = db.Column(db.String(200), nullable=False)
        description = db.Column(db.Text)
        start_time = db.Column(db.DateTime, nullable=False)
        end_time = db.Column(db.DateTime, nullable=False)
        shift_type = db.Column(db.String(20), nullable=False, default=ShiftType.REGULAR.value)
        status = db.Column(db.String(20), nullable=False, default=ShiftStatus.SCHEDULED.value)
        created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

        def to_dict(self):
            return {
                'id': self.id,
                'title': self.title,
                'description': self.description,
                'startTime': self.start_time.isoformat(),
                'endTime': self.end_time.isoformat(),
                'shiftType': self.shift_type,
                'status': self.status,
            }

        def __repr__(self):
            return f'<Shift {self.id}: {self.title} {self.start_time:%H:%M}-{self.end_time:%H:%M}>'

    return Shift
