"""
User Convention API Endpoints

Admin endpoints manage any staff member's conventions; /my endpoints let
staff manage the conventions they selected themselves.
"""
from flask import Blueprint, jsonify, request

from hsm.error_handlers import handle_errors
from hsm.models import Role, get_db, get_models
from hsm.services.convention_links import ConventionLinkService

from .auth import get_current_user, require_authentication, require_role

conventions_bp = Blueprint('conventions', __name__, url_prefix='/api/conventions')


def _service():
    return ConventionLinkService(get_db().session, get_models())


def _convention_ids():
    data = request.get_json(silent=True) or {}
    return data.get('conventionIds')


@conventions_bp.route('/available', methods=['GET'])
@handle_errors
@require_authentication()
def available_conventions():
    """GET /api/conventions/available (active conventions, by type and title)"""
    conventions = _service().get_available()
    return jsonify([c.to_dict() for c in conventions]), 200


@conventions_bp.route('/users/<user_id>/assign', methods=['POST'])
@handle_errors
@require_role(Role.ADMIN)
def assign_conventions(user_id):
    """POST /api/conventions/users/<user_id>/assign with {"conventionIds": [...]}"""
    links = _service().assign_to_user(user_id, _convention_ids(), get_current_user().id)
    return jsonify([link.to_dict() for link in links]), 201


@conventions_bp.route('/users/<user_id>/remove/<convention_id>', methods=['DELETE'])
@handle_errors
@require_role(Role.ADMIN)
def remove_convention(user_id, convention_id):
    return jsonify(_service().remove_from_user(user_id, convention_id)), 200


@conventions_bp.route('/users/<user_id>', methods=['GET'])
@handle_errors
@require_role(Role.ADMIN)
def user_conventions(user_id):
    links = _service().get_user_conventions(user_id)
    return jsonify([link.to_dict() for link in links]), 200


@conventions_bp.route('/my/select', methods=['POST'])
@handle_errors
@require_authentication()
def select_my_conventions():
    """POST /api/conventions/my/select with {"conventionIds": [...]}"""
    links = _service().select_for_self(get_current_user().id, _convention_ids())
    return jsonify([link.to_dict() for link in links]), 201


@conventions_bp.route('/my/<convention_id>', methods=['DELETE'])
@handle_errors
@require_authentication()
def remove_my_convention(convention_id):
    return jsonify(_service().remove_own(get_current_user().id, convention_id)), 200


@conventions_bp.route('/my', methods=['GET'])
@handle_errors
@require_authentication()
def my_conventions():
    links = _service().get_user_conventions(get_current_user().id)
    return jsonify([link.to_dict() for link in links]), 200


@conventions_bp.route('/my/stats', methods=['GET'])
@handle_errors
@require_authentication()
def my_convention_stats():
    return jsonify(_service().get_stats(get_current_user().id)), 200
