"""
Rule Interpreter
Turns a convention's free text into explicit rule predicates and evaluates them

Matching is keyword based: every test is a plain substring test against
the lower-cased "title description" text, so several rule kinds can fire
for one convention. Matching quirks:

- A weekend mention alone bans weekends; a day name needs a restriction
  keyword somewhere in the text.
- "no" also matches inside words such as "not" or "afternoon".
- "Weekend Only Availability" has no allow-list meaning; on weekdays it
  is a no-op.
"""
import re
from typing import Iterable, List, Optional

from .validation_types import AssignmentContext, ConventionRule, RuleKind

DAY_NAMES = ['monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday']

WEEKEND_KEYWORDS = ['weekend', 'weekends']
NIGHT_KEYWORDS = ['night', 'overnight', 'late evening']
MORNING_KEYWORDS = ['morning', 'early']
AFTERNOON_EVENING_KEYWORDS = ['afternoon', 'evening']
CONSECUTIVE_KEYWORDS = ['consecutive', 'back-to-back', 'double']

# Day bans also accept "unavailable"; time-of-day bans do not
DAY_RESTRICTION_KEYWORDS = ['cannot', 'no', 'restrict', 'unavailable']
TIME_RESTRICTION_KEYWORDS = ['cannot', 'no', 'restrict']

MAX_HOURS_PATTERN = re.compile(r'(\d+)\s*hours?\s*per\s*week')
MAX_SHIFTS_PATTERN = re.compile(r'(\d+)\s*shifts?\s*per\s*week')

NIGHT_START_HOUR = 22
NIGHT_END_HOUR = 6
MORNING_HOURS = range(5, 12)
AFTERNOON_EVENING_HOURS = range(12, 22)


def contains_keyword(text: str, keywords: Iterable[str]) -> bool:
    """Check if text contains any of the keywords"""
    return any(keyword in text for keyword in keywords)


def convention_text(title: str, description: Optional[str]) -> str:
    """Lower-cased "title description" text the keyword tests run against"""
    return f"{title.lower()} {(description or '').lower()}"


def interpret_convention(title: str, description: Optional[str] = None) -> List[ConventionRule]:
    """
    Interpret one convention as a list of rule predicates

    Args:
        title: Convention title
        description: Optional convention description

    Returns:
        Rules in evaluation order. Empty when no keyword matched.
    """
    text = convention_text(title, description)
    rules = []

    if contains_keyword(text, WEEKEND_KEYWORDS):
        rules.append(ConventionRule(RuleKind.WEEKEND_BAN, title))

    if contains_keyword(text, DAY_RESTRICTION_KEYWORDS):
        for day in DAY_NAMES:
            if day in text:
                rules.append(ConventionRule(RuleKind.DAY_BAN, title, day=day))

    if contains_keyword(text, NIGHT_KEYWORDS):
        rules.append(ConventionRule(RuleKind.NIGHT_BAN, title))

    if contains_keyword(text, MORNING_KEYWORDS) and contains_keyword(text, TIME_RESTRICTION_KEYWORDS):
        rules.append(ConventionRule(RuleKind.MORNING_BAN, title))

    if contains_keyword(text, AFTERNOON_EVENING_KEYWORDS) and contains_keyword(text, TIME_RESTRICTION_KEYWORDS):
        rules.append(ConventionRule(RuleKind.AFTERNOON_EVENING_BAN, title))

    if contains_keyword(text, CONSECUTIVE_KEYWORDS):
        rules.append(ConventionRule(RuleKind.CONSECUTIVE_BAN, title))

    hours_match = MAX_HOURS_PATTERN.search(text)
    if hours_match:
        rules.append(ConventionRule(RuleKind.WEEKLY_HOUR_CAP, title, limit=int(hours_match.group(1))))

    shifts_match = MAX_SHIFTS_PATTERN.search(text)
    if shifts_match:
        rules.append(ConventionRule(RuleKind.WEEKLY_SHIFT_CAP, title, limit=int(shifts_match.group(1))))

    return rules


def _format_hours(hours: float) -> str:
    return f"{hours:g}"


def evaluate_rule(rule: ConventionRule, context: AssignmentContext) -> Optional[str]:
    """
    Evaluate one rule against a candidate assignment

    Args:
        rule: Rule produced by interpret_convention()
        context: Candidate assignment facts. Aggregates must be present for
            rules whose kind needs them.

    Returns:
        Violation message, or None if the assignment satisfies the rule
    """
    title = rule.convention_title
    weekday = context.target_date.weekday()  # 0=Monday, 6=Sunday
    hour = context.start_hour

    if rule.kind == RuleKind.WEEKEND_BAN:
        if weekday >= 5:
            return f'Convention "{title}" restricts weekend work'

    elif rule.kind == RuleKind.DAY_BAN:
        if DAY_NAMES[weekday] == rule.day:
            return f'Convention "{title}" restricts work on {rule.day}'

    elif rule.kind == RuleKind.NIGHT_BAN:
        if hour >= NIGHT_START_HOUR or hour < NIGHT_END_HOUR:
            return f'Convention "{title}" restricts night shifts'

    elif rule.kind == RuleKind.MORNING_BAN:
        if hour in MORNING_HOURS:
            return f'Convention "{title}" restricts morning shifts'

    elif rule.kind == RuleKind.AFTERNOON_EVENING_BAN:
        if hour in AFTERNOON_EVENING_HOURS:
            return f'Convention "{title}" restricts afternoon/evening shifts'

    elif rule.kind == RuleKind.CONSECUTIVE_BAN:
        if context.aggregates.has_adjacent_assignment:
            return f'Convention "{title}" restricts consecutive shifts'

    elif rule.kind == RuleKind.WEEKLY_HOUR_CAP:
        current = context.aggregates.weekly_hours
        if current + context.duration_hours > rule.limit:
            return (
                f'Convention "{title}" limits to {rule.limit} hours/week. '
                f'Current: {_format_hours(current)}h, Adding: {_format_hours(context.duration_hours)}h'
            )

    elif rule.kind == RuleKind.WEEKLY_SHIFT_CAP:
        current = context.aggregates.weekly_shift_count
        if current >= rule.limit:
            return f'Convention "{title}" limits to {rule.limit} shifts/week. Current: {current}'

    return None
