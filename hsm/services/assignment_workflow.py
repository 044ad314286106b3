"""
Shift Assignment Service
Validated create/update/remove of shift assignments
"""
import calendar
import logging
import threading
from contextlib import contextmanager, nullcontext
from datetime import date
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from hsm.error_handlers.exceptions import (
    AppException,
    AuthorizationException,
    ConflictException,
    ConventionViolationException,
    PreconditionFailedException,
    ResourceNotFoundException,
    ValidationException,
)
from hsm.utils.validators import (
    parse_date_value,
    parse_optional_date,
    validate_id_fields,
    validate_required_fields,
)

from .convention_validator import ConventionValidator
from .repositories import AssignmentRepository, ShiftRepository, UserRepository

logger = logging.getLogger(__name__)

DUPLICATE_MESSAGE = 'This shift is already assigned to the user on this date'


class UserLockRegistry:
    """
    One lock per user id

    Holding a user's lock around check-then-insert keeps weekly caps from
    being exceeded by concurrent requests in the same process.
    """

    def __init__(self):
        self._locks: Dict[str, threading.Lock] = {}
        self.lock = threading.Lock()

    def get(self, user_id: str) -> threading.Lock:
        with self.lock:
            user_lock = self._locks.get(user_id)
            if user_lock is None:
                user_lock = threading.Lock()
                self._locks[user_id] = user_lock
            return user_lock

    def __len__(self):
        with self.lock:
            return len(self._locks)

    @contextmanager
    def hold(self, user_id: str):
        user_lock = self.get(user_id)
        with user_lock:
            yield


# Global instance shared by all request-scoped services
user_locks = UserLockRegistry()


class ShiftAssignmentService:
    """
    Transactional caller of the ConventionValidator

    Handles:
    - Single and bulk assignment creation
    - Moving an assignment to a new date
    - Admin-only removal
    - Listing assignments (own assignments for non-admins)
    """

    def __init__(self, db_session: Session, models: dict, serialize_per_user: bool = True,
                 locks: Optional[UserLockRegistry] = None):
        """
        Initialize ShiftAssignmentService

        Args:
            db_session: SQLAlchemy database session
            models: Dictionary of model classes from the model registry
            serialize_per_user: Hold a per-user lock around validate+write
            locks: Lock registry (defaults to the process-wide one)
        """
        self.db = db_session
        self.ShiftAssignment = models['ShiftAssignment']
        self.users = UserRepository(db_session, models)
        self.shifts = ShiftRepository(db_session, models)
        self.assignments = AssignmentRepository(db_session, models)
        self.validator = ConventionValidator(db_session, models)
        self.serialize_per_user = serialize_per_user
        self.locks = locks if locks is not None else user_locks

    def _user_guard(self, user_id: str):
        if self.serialize_per_user:
            return self.locks.hold(user_id)
        return nullcontext()

    def create(self, data: dict, admin_id: str) -> object:
        """
        Create a shift assignment after duplicate and convention checks

        Args:
            data: {'userId', 'shiftId', 'date'}
            admin_id: Administrator creating the assignment

        Returns:
            The persisted ShiftAssignment

        Raises:
            ValidationException: Malformed input
            ResourceNotFoundException: Unknown user or shift
            PreconditionFailedException: Inactive user
            ConflictException: Same shift already assigned to the user that day
            ConventionViolationException: One or more conventions violated
        """
        validate_required_fields(data, ['userId', 'shiftId', 'date'])
        validate_id_fields(data, ['userId', 'shiftId'])
        user_id = data['userId']
        shift_id = data['shiftId']
        assignment_date = parse_date_value(data['date'])

        user = self.users.find_by_id(user_id)
        if not user:
            raise ResourceNotFoundException('User not found')
        if not user.is_active:
            raise PreconditionFailedException('Cannot assign shifts to inactive user')

        with self._user_guard(user.id):
            if not self.shifts.find_by_id(shift_id):
                raise ResourceNotFoundException('Shift not found')

            if self.assignments.exists_by_user_shift_date(user_id, shift_id, assignment_date):
                raise ConflictException(DUPLICATE_MESSAGE)

            validation = self.validator.validate(user_id, shift_id, assignment_date)
            if not validation.is_valid:
                raise ConventionViolationException(
                    'Shift assignment violates user conventions',
                    validation.violations,
                    validation.warnings
                )

            assignment = self.ShiftAssignment(
                user_id=user_id,
                shift_id=shift_id,
                date=assignment_date,
                created_by_id=admin_id
            )
            try:
                self.assignments.insert(assignment)
                self.db.commit()
            except ConflictException:
                raise
            except Exception:
                self.db.rollback()
                raise

        logger.info(f"Assigned shift {shift_id} to user {user_id} on {assignment_date} (by {admin_id})")
        return assignment

    def bulk_create(self, items: List[dict], admin_id: str) -> dict:
        """
        Create many assignments, each succeeding or failing on its own

        Returns:
            {'successful': [ShiftAssignment], 'failed': [{'assignment': item, 'error': str}]}
        """
        if not isinstance(items, list):
            raise ValidationException('assignments must be a list')

        results = {'successful': [], 'failed': []}

        for item in items:
            try:
                results['successful'].append(self.create(item, admin_id))
            except AppException as e:
                self.db.rollback()
                results['failed'].append({'assignment': item, 'error': e.message})
            except Exception as e:
                self.db.rollback()
                logger.error(f"Unexpected error in bulk assignment for {item}: {str(e)}", exc_info=True)
                results['failed'].append({'assignment': item, 'error': 'An unexpected error occurred'})

        logger.info(
            f"Bulk assignment by {admin_id}: {len(results['successful'])} created, "
            f"{len(results['failed'])} failed"
        )
        return results

    def update(self, assignment_id: str, data: dict, admin_id: str) -> object:
        """
        Move an assignment to a new date

        Only the date can change. The new date is validated as if the
        assignment were new, ignoring the assignment itself in aggregates.
        """
        assignment = self.assignments.find_by_id(assignment_id)
        if not assignment:
            raise ResourceNotFoundException('Shift assignment not found')

        if not isinstance(data, dict) or data.get('date') in (None, ''):
            return assignment

        new_date = parse_date_value(data['date'])

        with self._user_guard(assignment.user_id):
            if self.assignments.exists_by_user_shift_date(
                assignment.user_id, assignment.shift_id, new_date, exclude_id=assignment.id
            ):
                raise ConflictException(DUPLICATE_MESSAGE)

            validation = self.validator.validate(
                assignment.user_id,
                assignment.shift_id,
                new_date,
                exclude_assignment_ids=[assignment.id]
            )
            if not validation.is_valid:
                raise ConventionViolationException(
                    'New date violates user conventions',
                    validation.violations,
                    validation.warnings
                )

            old_date = assignment.date
            assignment.date = new_date
            try:
                self.assignments.flush_unique()
                self.db.commit()
            except ConflictException:
                raise
            except Exception:
                self.db.rollback()
                raise

        logger.info(f"Moved assignment {assignment_id} from {old_date} to {new_date} (by {admin_id})")
        return assignment

    def remove(self, assignment_id: str, requester_id: str, is_admin: bool) -> dict:
        """Hard-delete an assignment (administrators only)"""
        assignment = self.assignments.find_by_id(assignment_id)
        if not assignment:
            raise ResourceNotFoundException('Shift assignment not found')

        if not is_admin:
            raise AuthorizationException('Only administrators can delete shift assignments')

        try:
            self.assignments.delete(assignment)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Deleted assignment {assignment_id} (by {requester_id})")
        return {'message': 'Shift assignment deleted successfully'}

    def find_all(self, filters: dict, requester_id: str, is_admin: bool) -> List[object]:
        """
        List assignments with optional startDate/endDate/userId filters

        Non-admin users only ever see their own assignments; admins see
        everyone's unless userId is given.
        """
        target_user_id = filters.get('userId') if is_admin else requester_id
        start = parse_optional_date(filters.get('startDate'), 'startDate')
        end = parse_optional_date(filters.get('endDate'), 'endDate')
        return self.assignments.find_filtered(target_user_id, start, end)

    def find_one(self, assignment_id: str, requester_id: str, is_admin: bool) -> object:
        assignment = self.assignments.find_by_id(assignment_id)
        if not assignment:
            raise ResourceNotFoundException('Shift assignment not found')

        if not is_admin and assignment.user_id != requester_id:
            raise AuthorizationException('You can only view your own shift assignments')

        return assignment

    def get_monthly_assignments(self, user_id: str, year: int, month: int) -> List[object]:
        """Assignments of a user within one calendar month (calendar view)"""
        if not 1 <= month <= 12:
            raise ValidationException(f'Invalid month: {month}')

        last_day = calendar.monthrange(year, month)[1]
        return self.assignments.find_filtered(user_id, date(year, month, 1), date(year, month, last_day))
