"""
Validation types and data classes for convention checking
"""
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional
from enum import Enum


class RuleKind(str, Enum):
    """Predicates a convention's text can be interpreted as, in evaluation order"""
    WEEKEND_BAN = "weekend_ban"
    DAY_BAN = "day_ban"
    NIGHT_BAN = "night_ban"
    MORNING_BAN = "morning_ban"
    AFTERNOON_EVENING_BAN = "afternoon_evening_ban"
    CONSECUTIVE_BAN = "consecutive_ban"
    WEEKLY_HOUR_CAP = "weekly_hour_cap"
    WEEKLY_SHIFT_CAP = "weekly_shift_cap"

    @property
    def needs_aggregates(self) -> bool:
        """True when evaluating this rule requires the user's assignment history"""
        return self in (RuleKind.CONSECUTIVE_BAN, RuleKind.WEEKLY_HOUR_CAP, RuleKind.WEEKLY_SHIFT_CAP)


@dataclass(frozen=True)
class ConventionRule:
    """
    One predicate derived from a convention

    Attributes:
        kind: Which check to run
        convention_title: Original (non lower-cased) title, used in messages
        day: Lower-case day name for DAY_BAN
        limit: Numeric cap for WEEKLY_HOUR_CAP / WEEKLY_SHIFT_CAP
    """
    kind: RuleKind
    convention_title: str
    day: Optional[str] = None
    limit: Optional[int] = None


@dataclass(frozen=True)
class WeeklyAggregate:
    """Aggregates over the user's existing assignments around a target date"""
    weekly_hours: float = 0.0
    weekly_shift_count: int = 0
    has_adjacent_assignment: bool = False


@dataclass(frozen=True)
class AssignmentContext:
    """Everything a rule needs to judge one candidate assignment"""
    target_date: date
    start_hour: int
    duration_hours: float
    aggregates: Optional[WeeklyAggregate] = None


@dataclass
class ValidationResult:
    """Result of validating a proposed shift assignment"""
    is_valid: bool = True
    violations: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_violation(self, message: str):
        self.violations.append(message)
        self.is_valid = False

    def to_dict(self) -> dict:
        return {
            'isValid': self.is_valid,
            'violations': list(self.violations),
            'warnings': list(self.warnings),
        }
