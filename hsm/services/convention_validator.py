"""
Convention Validator Service
Validates a candidate shift assignment against the user's conventions
"""
import logging
from datetime import date
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from .aggregate_calculator import AggregateCalculator, shift_bounds, to_calendar_date
from .repositories import AssignmentRepository, ConventionRepository, ShiftRepository
from .rule_interpreter import evaluate_rule, interpret_convention
from .validation_types import AssignmentContext, ValidationResult

logger = logging.getLogger(__name__)


class ConventionValidator:
    """
    Decides whether assigning a shift to a user on a date is compatible with
    every active convention linked to that user

    Handles:
    - Day-of-week and weekend bans
    - Time-of-day bans (night, morning, afternoon/evening)
    - Consecutive-day bans
    - Weekly hour and shift-count caps

    All conventions are evaluated; the result lists every violation found.
    Admin-assigned and user-selected conventions are equally binding.
    Validation only reads, so repeated calls on unchanged data agree.
    """

    def __init__(self, db_session: Session, models: dict):
        """
        Initialize ConventionValidator

        Args:
            db_session: SQLAlchemy database session
            models: Dictionary of model classes from the model registry
        """
        self.conventions = ConventionRepository(db_session, models)
        self.shifts = ShiftRepository(db_session, models)
        self.aggregates = AggregateCalculator(AssignmentRepository(db_session, models))

    def validate(self, user_id: str, shift_id: str, target_date: date,
                 exclude_assignment_ids: Optional[Iterable[str]] = None) -> ValidationResult:
        """
        Validate a proposed shift assignment

        Args:
            user_id: User receiving the shift
            shift_id: Shift template being assigned
            target_date: Assignment date; any time-of-day is discarded
            exclude_assignment_ids: Existing assignments to ignore in the
                weekly and adjacency aggregates (used when moving one)

        Returns:
            ValidationResult with is_valid flag and violation messages
        """
        result = ValidationResult()
        target_date = to_calendar_date(target_date)

        user_conventions = self.conventions.find_active_for_user(user_id)
        if not user_conventions:
            return result

        shift = self.shifts.find_by_id(shift_id)
        if not shift:
            result.add_violation('Shift not found')
            return result

        start, end = shift_bounds(shift, target_date)
        rules = []
        for link in user_conventions:
            convention = link.convention
            rules.extend(interpret_convention(convention.title, convention.description))

        aggregates = None
        if any(rule.kind.needs_aggregates for rule in rules):
            aggregates = self.aggregates.calculate(user_id, target_date, exclude_assignment_ids)

        context = AssignmentContext(
            target_date=target_date,
            start_hour=start.hour,
            duration_hours=(end - start).total_seconds() / 3600,
            aggregates=aggregates,
        )

        for rule in rules:
            violation = evaluate_rule(rule, context)
            if violation:
                result.add_violation(violation)

        if result.violations:
            logger.info(
                f"Assignment of shift {shift_id} to user {user_id} on {target_date} "
                f"violates {len(result.violations)} convention rule(s)"
            )

        return result
