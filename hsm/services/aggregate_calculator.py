"""
Aggregate Calculator
Weekly hours, weekly shift count and adjacency for a user around a date

The arithmetic lives in pure functions over assignment snapshots so it can
be tested without a database; AggregateCalculator only adds the read.
"""
from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Tuple

from .validation_types import WeeklyAggregate


def to_calendar_date(value) -> date:
    """Normalize a date/datetime to its calendar date (time-of-day discarded)"""
    if isinstance(value, datetime):
        return value.date()
    return value


def week_window(target_date: date) -> Tuple[date, date]:
    """
    Monday-to-Monday window containing target_date

    Returns:
        (week_start, week_end) with week_start inclusive and week_end
        exclusive. Sunday maps to the Monday six days earlier.
    """
    target_date = to_calendar_date(target_date)
    week_start = target_date - timedelta(days=target_date.weekday())
    return week_start, week_start + timedelta(days=7)


def shift_bounds(shift, on_date: date) -> Tuple[datetime, datetime]:
    """
    Concrete start/end datetimes of a shift template placed on a date

    The template's stored date is ignored. When the end time-of-day is not
    after the start, the shift ends on the following day.
    """
    on_date = to_calendar_date(on_date)
    start = datetime.combine(on_date, shift.start_time.time())
    end = datetime.combine(on_date, shift.end_time.time())
    if end <= start:
        end += timedelta(days=1)
    return start, end


def shift_duration_hours(shift, on_date: Optional[date] = None) -> float:
    """Length of a shift template in hours"""
    start, end = shift_bounds(shift, on_date or date.today())
    return (end - start).total_seconds() / 3600


def lookup_range(target_date: date) -> Tuple[date, date]:
    """
    Date range (start inclusive, end exclusive) covering both the week
    window and the two adjacent days of target_date
    """
    target_date = to_calendar_date(target_date)
    week_start, week_end = week_window(target_date)
    start = min(week_start, target_date - timedelta(days=1))
    end = max(week_end, target_date + timedelta(days=2))
    return start, end


def compute_aggregates(assignments: Iterable, target_date: date,
                       exclude_ids: Optional[Iterable] = None) -> WeeklyAggregate:
    """
    Aggregate a snapshot of a user's assignments around target_date

    Args:
        assignments: Objects with `id`, `date` and `shift` (a shift template)
        target_date: Candidate assignment date
        exclude_ids: Assignment ids to leave out (e.g. the one being moved)

    Returns:
        WeeklyAggregate; zeros/False for an empty snapshot
    """
    target_date = to_calendar_date(target_date)
    week_start, week_end = week_window(target_date)
    adjacent_days = {target_date - timedelta(days=1), target_date + timedelta(days=1)}
    excluded = set(exclude_ids or ())

    weekly_hours = 0.0
    weekly_count = 0
    has_adjacent = False

    for assignment in assignments:
        if assignment.id in excluded:
            continue
        assignment_date = to_calendar_date(assignment.date)

        if week_start <= assignment_date < week_end:
            weekly_count += 1
            weekly_hours += shift_duration_hours(assignment.shift, assignment_date)

        if assignment_date in adjacent_days:
            has_adjacent = True

    return WeeklyAggregate(
        weekly_hours=weekly_hours,
        weekly_shift_count=weekly_count,
        has_adjacent_assignment=has_adjacent,
    )


class AggregateCalculator:
    """
    Reads a user's assignments around a date and aggregates them

    Read-only; tolerates users with no assignments.
    """

    def __init__(self, assignment_repository):
        self.assignments = assignment_repository

    def calculate(self, user_id: str, target_date: date,
                  exclude_ids: Optional[Iterable] = None) -> WeeklyAggregate:
        start, end = lookup_range(target_date)
        snapshot = self.assignments.find_by_user_and_date_range(user_id, start, end)
        return compute_aggregates(snapshot, target_date, exclude_ids)
