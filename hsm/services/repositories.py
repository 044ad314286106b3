"""
Repositories
Thin query layer over the SQLAlchemy session used by the scheduling services
"""
from datetime import date
from typing import Iterable, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hsm.error_handlers.exceptions import ConflictException


class UserRepository:
    def __init__(self, db_session: Session, models: dict):
        self.db = db_session
        self.User = models['User']

    def find_by_id(self, user_id: str) -> Optional[object]:
        return self.db.get(self.User, user_id)


class ShiftRepository:
    def __init__(self, db_session: Session, models: dict):
        self.db = db_session
        self.Shift = models['Shift']

    def find_by_id(self, shift_id: str) -> Optional[object]:
        return self.db.get(self.Shift, shift_id)


class ConventionRepository:
    """Conventions and their user links"""

    def __init__(self, db_session: Session, models: dict):
        self.db = db_session
        self.Convention = models['Convention']
        self.UserConvention = models['UserConvention']

    def find_active_for_user(self, user_id: str) -> List[object]:
        """
        Links of a user whose convention is active, convention loaded

        Inactive conventions are filtered here so validation never sees them.
        """
        return self.db.query(self.UserConvention).join(
            self.Convention, self.UserConvention.convention_id == self.Convention.id
        ).filter(
            self.UserConvention.user_id == user_id,
            self.Convention.is_active.is_(True)
        ).order_by(self.UserConvention.assigned_at).all()

    def find_active(self) -> List[object]:
        """Active conventions ordered by type, then title"""
        return self.db.query(self.Convention).filter(
            self.Convention.is_active.is_(True)
        ).order_by(self.Convention.type, self.Convention.title).all()

    def find_for_user(self, user_id: str) -> List[object]:
        return self.db.query(self.UserConvention).filter_by(
            user_id=user_id
        ).order_by(self.UserConvention.assigned_at.desc()).all()

    def find_conventions(self, convention_ids: Iterable[str]) -> List[object]:
        return self.db.query(self.Convention).filter(
            self.Convention.id.in_(list(convention_ids))
        ).all()

    def find_link(self, user_id: str, convention_id: str) -> Optional[object]:
        return self.db.query(self.UserConvention).filter_by(
            user_id=user_id,
            convention_id=convention_id
        ).first()

    def count_links(self, user_id: str, selection_type: Optional[str] = None) -> int:
        query = self.db.query(func.count(self.UserConvention.id)).filter(
            self.UserConvention.user_id == user_id
        )
        if selection_type:
            query = query.filter(self.UserConvention.selection_type == selection_type)
        return query.scalar()

    def add_link(self, user_id: str, convention_id: str, selection_type: str,
                 assigned_by_id: str) -> object:
        link = self.UserConvention(
            user_id=user_id,
            convention_id=convention_id,
            selection_type=selection_type,
            assigned_by_id=assigned_by_id
        )
        self.db.add(link)
        return link

    def delete_link(self, link) -> None:
        self.db.delete(link)


class AssignmentRepository:
    """Shift assignments"""

    def __init__(self, db_session: Session, models: dict):
        self.db = db_session
        self.ShiftAssignment = models['ShiftAssignment']

    def find_by_id(self, assignment_id: str) -> Optional[object]:
        return self.db.get(self.ShiftAssignment, assignment_id)

    def find_by_user_and_date_range(self, user_id: str, start: date, end: date) -> List[object]:
        """
        Assignments of a user with start <= date < end, shift loaded
        """
        return self.db.query(self.ShiftAssignment).filter(
            self.ShiftAssignment.user_id == user_id,
            self.ShiftAssignment.date >= start,
            self.ShiftAssignment.date < end
        ).order_by(self.ShiftAssignment.date).all()

    def find_filtered(self, user_id: Optional[str] = None, start: Optional[date] = None,
                      end: Optional[date] = None) -> List[object]:
        """Assignments with optional user and inclusive date bounds"""
        query = self.db.query(self.ShiftAssignment)
        if user_id:
            query = query.filter(self.ShiftAssignment.user_id == user_id)
        if start:
            query = query.filter(self.ShiftAssignment.date >= start)
        if end:
            query = query.filter(self.ShiftAssignment.date <= end)
        return query.order_by(self.ShiftAssignment.date).all()

    def exists_by_user_shift_date(self, user_id: str, shift_id: str, on_date: date,
                                  exclude_id: Optional[str] = None) -> bool:
        query = self.db.query(self.ShiftAssignment.id).filter(
            self.ShiftAssignment.user_id == user_id,
            self.ShiftAssignment.shift_id == shift_id,
            self.ShiftAssignment.date == on_date
        )
        if exclude_id:
            query = query.filter(self.ShiftAssignment.id != exclude_id)
        return query.first() is not None

    def insert(self, assignment) -> object:
        """
        Add and flush a new assignment

        Raises:
            ConflictException: If the (user, shift, date) unique constraint fires
        """
        self.db.add(assignment)
        self.flush_unique()
        return assignment

    def flush_unique(self) -> None:
        """
        Flush pending changes, translating unique-constraint failures

        Raises:
            ConflictException: If the (user, shift, date) unique constraint fires
        """
        try:
            self.db.flush()
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictException(
                'This shift is already assigned to the user on this date',
                details={'constraint': 'unique_user_shift_date'}
            ) from e

    def delete(self, assignment) -> None:
        self.db.delete(assignment)
