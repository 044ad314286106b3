"""
Configuration management for the Hospital Staff Scheduler
Handles environment-based settings

Settings are read lazily through python-decouple so development and
testing work without a populated .env file.
"""
import secrets
from decouple import config
from typing import Optional


class Config:
    """Base configuration class"""
    # Flask settings
    # Development: Generate random key on startup (non-persistent OK for dev)
    SECRET_KEY = config('SECRET_KEY', default=secrets.token_hex(32))
    SQLALCHEMY_DATABASE_URI = config('DATABASE_URL', default='sqlite:///instance/hsm.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Logging settings
    LOG_LEVEL = config('LOG_LEVEL', default='INFO')
    LOG_FILE = config('LOG_FILE', default='logs/hsm.log')

    # Rate limiting
    RATELIMIT_ENABLED = config('RATELIMIT_ENABLED', default=True, cast=bool)
    RATELIMIT_DEFAULT = config('RATELIMIT_DEFAULT', default='300 per hour')

    # Shift assignment workflow
    # Serialize validate+insert per user inside this process so weekly caps
    # are checked against the latest committed aggregate
    ASSIGNMENT_SERIALIZE_PER_USER = config('ASSIGNMENT_SERIALIZE_PER_USER', default=True, cast=bool)

    # Header carrying the acting user's id (set by the upstream auth gateway)
    AUTH_USER_HEADER = config('AUTH_USER_HEADER', default='X-User-Id')

    @classmethod
    def validate(cls) -> None:
        """
        Validate configuration - can be called explicitly or on-demand

        Raises:
            ValueError: If required configuration is missing
        """
        pass  # Base config has no required validation


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False


class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    WTF_CSRF_ENABLED = False
    RATELIMIT_ENABLED = False
    LOG_FILE = 'logs/hsm-test.log'


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False

    SECRET_KEY = config('SECRET_KEY', default='change-this-to-a-random-secret-key-in-production')

    # Session Security
    SESSION_COOKIE_SECURE = config('SESSION_COOKIE_SECURE', default=True, cast=bool)
    SESSION_COOKIE_HTTPONLY = config('SESSION_COOKIE_HTTPONLY', default=True, cast=bool)
    SESSION_COOKIE_SAMESITE = config('SESSION_COOKIE_SAMESITE', default='Lax')

    # Database Connection Pool (for production databases)
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_size': config('DB_POOL_SIZE', default=10, cast=int),
        'pool_recycle': config('DB_POOL_RECYCLE', default=3600, cast=int),
        'pool_pre_ping': True,
        'max_overflow': config('DB_MAX_OVERFLOW', default=20, cast=int),
    }

    LOG_LEVEL = config('LOG_LEVEL', default='WARNING')

    @classmethod
    def validate(cls) -> None:
        """
        Production mode: validate all required settings

        Raises:
            ValueError: If any required configuration is missing
        """
        try:
            secret_key = config('SECRET_KEY')
        except Exception:
            raise ValueError(
                "SECRET_KEY environment variable must be set in production. "
                "Generate a secure key with: python -c 'import secrets; print(secrets.token_hex(32))'"
            )

        if len(secret_key) < 32:
            raise ValueError(
                f"SECRET_KEY must be at least 32 characters in production (current: {len(secret_key)})."
            )


# Configuration mapping
config_mapping = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}


def get_config(config_name: Optional[str] = None, validate: bool = False) -> type:
    """
    Get configuration class based on environment.

    Args:
        config_name: Environment name ('development', 'testing', 'production')
        validate: Whether to validate configuration immediately (default: False)

    Returns:
        Config class for the specified environment

    Raises:
        ValueError: If validation is enabled and required variables are missing
    """
    if config_name is None:
        config_name = config('FLASK_ENV', default='development')

    config_class = config_mapping.get(config_name, DevelopmentConfig)

    if validate:
        config_class.validate()

    return config_class
