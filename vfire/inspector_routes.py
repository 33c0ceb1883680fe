from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from .auth import role_required
from .container import get_dashboard_service, get_inspection_service
from .domain.statuses import UserRole
from .schemas import ChecklistRequest, parse

inspector_bp = Blueprint('inspector', __name__, url_prefix='/inspector')


@inspector_bp.route('/dashboard')
@login_required
@role_required(UserRole.INSPECTOR)
def dashboard():
    return jsonify(get_dashboard_service().get_inspector_dashboard(current_user))


@inspector_bp.route('/inspections')
@login_required
@role_required(UserRole.INSPECTOR)
def assigned_inspections():
    return jsonify({'inspections': get_inspection_service().list_assigned(current_user)})


@inspector_bp.route('/inspections/completed')
@login_required
@role_required(UserRole.INSPECTOR)
def completed_inspections():
    return jsonify({'inspections': get_inspection_service().list_completed(current_user)})


@inspector_bp.route('/inspections/<uuid:application_id>')
@login_required
@role_required(UserRole.INSPECTOR)
def get_inspection(application_id):
    return jsonify(get_inspection_service().get(current_user, application_id))


@inspector_bp.route('/inspections/<uuid:application_id>/checklist', methods=['POST'])
@login_required
@role_required(UserRole.INSPECTOR)
def submit_checklist(application_id):
    payload = parse(ChecklistRequest, request.get_json(silent=True))
    result = get_inspection_service().submit_checklist(current_user, application_id, payload)
    return jsonify(result.to_dict()), 201


@inspector_bp.route('/inspections/<uuid:application_id>/checklist')
@login_required
@role_required(UserRole.INSPECTOR)
def get_checklist(application_id):
    return jsonify(get_inspection_service().get_checklist(current_user, application_id))
