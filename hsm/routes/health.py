"""
Health Check and Monitoring Endpoints
Liveness/readiness probes and process status for the scheduler service.
"""
from flask import Blueprint, jsonify, current_app
from datetime import datetime
from sqlalchemy import text
import sys
import psutil
import os

from hsm.models import get_db, get_models

health_bp = Blueprint('health', __name__, url_prefix='/health')


@health_bp.route('/ping', methods=['GET'])
def ping():
    """Basic connectivity check"""
    return jsonify({
        'status': 'ok',
        'message': 'pong',
        'timestamp': datetime.utcnow().isoformat()
    }), 200


@health_bp.route('/live', methods=['GET'])
def liveness():
    """
    Liveness probe - the process is up and serving requests.

    Returns:
        200: Application is alive
    """
    return jsonify({
        'status': 'alive',
        'timestamp': datetime.utcnow().isoformat()
    }), 200


@health_bp.route('/ready', methods=['GET'])
def readiness():
    """
    Readiness probe - the database answers and the model registry is loaded.

    Returns:
        200: Application is ready
        503: Application is not ready
    """
    checks = {
        'database': False,
        'models': False,
    }
    errors = []

    try:
        get_db().session.execute(text('SELECT 1'))
        checks['database'] = True
    except Exception as e:
        current_app.logger.warning(f"Readiness database check failed: {str(e)}")
        errors.append(f"Database: {str(e)}")

    try:
        checks['models'] = 'ShiftAssignment' in get_models()
    except RuntimeError as e:
        errors.append(f"Models: {str(e)}")

    all_checks_passed = all(checks.values())
    status_code = 200 if all_checks_passed else 503

    response = {
        'status': 'ready' if all_checks_passed else 'not_ready',
        'checks': checks,
        'timestamp': datetime.utcnow().isoformat()
    }

    if errors:
        response['errors'] = errors

    return jsonify(response), status_code


@health_bp.route('/status', methods=['GET'])
def status():
    """
    Process resources and configuration summary.

    Returns:
        200: Status information
    """
    process = psutil.Process()
    memory_info = process.memory_info()
    database_uri = current_app.config.get('SQLALCHEMY_DATABASE_URI', '')

    return jsonify({
        'status': 'operational',
        'timestamp': datetime.utcnow().isoformat(),
        'application': {
            'name': 'Hospital Staff Scheduler',
            'testing': current_app.testing,
            'debug': current_app.debug,
            'serialize_per_user': current_app.config.get('ASSIGNMENT_SERIALIZE_PER_USER', True),
        },
        'system': {
            'python_version': sys.version,
            'platform': sys.platform,
            'process_id': os.getpid(),
        },
        'resources': {
            'memory': {
                'used_mb': round(memory_info.rss / 1024 / 1024, 2),
                'percent': round(process.memory_percent(), 2),
            },
            'cpu': {
                'percent': round(process.cpu_percent(interval=None), 2),
            },
        },
        'database': {
            'type': database_uri.split(':', 1)[0] or 'unknown',
        }
    }), 200
