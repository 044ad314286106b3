"""
Scheduling services
"""
from .validation_types import ValidationResult, WeeklyAggregate, RuleKind, ConventionRule
from .rule_interpreter import interpret_convention, evaluate_rule
from .aggregate_calculator import AggregateCalculator, compute_aggregates, week_window
from .convention_validator import ConventionValidator
from .assignment_workflow import ShiftAssignmentService
from .convention_links import ConventionLinkService

__all__ = [
    'ValidationResult',
    'WeeklyAggregate',
    'RuleKind',
    'ConventionRule',
    'interpret_convention',
    'evaluate_rule',
    'AggregateCalculator',
    'compute_aggregates',
    'week_window',
    'ConventionValidator',
    'ShiftAssignmentService',
    'ConventionLinkService',
]
