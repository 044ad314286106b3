"""
Model Registry - Centralized model access using Flask extension pattern

Models are built by factory functions at app creation time, so services
and blueprints look them up here instead of importing classes directly.

Usage:
    from hsm.models import get_models

    def my_view():
        models = get_models()
        assignment = db.session.get(models['ShiftAssignment'], assignment_id)
"""
from flask import current_app
from typing import Dict, Any, Optional


class ModelRegistry:
    """
    Flask extension holding the model classes produced by init_models()
    """

    def __init__(self, app=None):
        self.models: Dict[str, Any] = {}
        if app:
            self.init_app(app)

    def init_app(self, app):
        """Attach the registry to app.extensions['models']"""
        app.extensions['models'] = self

    def register(self, models_dict: Dict[str, Any]):
        """
        Register all models with the registry

        Args:
            models_dict: Dictionary mapping model names to model classes
        """
        self.models = models_dict

    def get(self, model_name: str) -> Optional[Any]:
        return self.models.get(model_name)

    def __getitem__(self, model_name: str) -> Any:
        """
        Dict-like access to models

        Raises:
            KeyError: If model name is not registered
        """
        return self.models[model_name]


# Global instance
model_registry = ModelRegistry()


def get_models() -> Dict[str, Any]:
    """
    Get all registered models from the current app context

    Returns:
        Dictionary containing all registered models

    Raises:
        RuntimeError: If called outside application context or before
            the registry was initialized
    """
    if 'models' not in current_app.extensions:
        raise RuntimeError(
            "ModelRegistry not initialized. "
            "Ensure model_registry.init_app(app) is called during app setup."
        )

    return current_app.extensions['models'].models


def get_db():
    """
    Get the SQLAlchemy database instance bound to the current app

    Raises:
        RuntimeError: If called outside application context
    """
    return current_app.extensions['sqlalchemy']
