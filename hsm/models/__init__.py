"""
Database models for the Hospital Staff Scheduler
Centralizes all SQLAlchemy model imports using factory pattern
"""
from .user import create_user_model, Role
from .convention import create_convention_models, ConventionType, SelectionType
from .shift import create_shift_model, ShiftType, ShiftStatus
from .shift_assignment import create_shift_assignment_model


def init_models(db):
    """
    Initialize all models with the database instance

    Args:
        db: SQLAlchemy database instance

    Returns:
        dict: Dictionary containing all model classes
    """
    User = create_user_model(db)
    Convention, UserConvention = create_convention_models(db)
    Shift = create_shift_model(db)
    ShiftAssignment = create_shift_assignment_model(db)

    return {
        'User': User,
        'Convention': Convention,
        'UserConvention': UserConvention,
        'Shift': Shift,
        'ShiftAssignment': ShiftAssignment,
    }


__all__ = [
    'init_models',
    'create_user_model',
    'create_convention_models',
    'create_shift_model',
    'create_shift_assignment_model',
    'Role',
    'ConventionType',
    'SelectionType',
    'ShiftType',
    'ShiftStatus',
    # Model registry exports
    'model_registry',
    'get_models',
    'get_db'
]

# Import registry for convenience
from .registry import model_registry, get_models, get_db
