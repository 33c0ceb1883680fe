from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from .auth import role_required
from .container import get_application_service, get_dashboard_service, get_establishment_service
from .domain.statuses import ApplicationType, UserRole
from .schemas import ApplyRequest, EstablishmentInput, parse

owner_bp = Blueprint('owner', __name__, url_prefix='/owner')


def _body():
    return request.get_json(silent=True) or {}


@owner_bp.route('/dashboard')
@login_required
@role_required(UserRole.OWNER)
def dashboard():
    return jsonify(get_dashboard_service().get_owner_dashboard(current_user))


# Establishments

@owner_bp.route('/establishments')
@login_required
@role_required(UserRole.OWNER)
def list_establishments():
    return jsonify({'establishments': get_establishment_service().list_for_owner(current_user)})


@owner_bp.route('/establishments/registered')
@login_required
@role_required(UserRole.OWNER)
def list_registered_establishments():
    """Establishments that may be used to apply for a certificate."""
    return jsonify({'establishments': get_establishment_service().list_registered_for_owner(current_user)})


@owner_bp.route('/establishments', methods=['POST'])
@login_required
@role_required(UserRole.OWNER)
def register_establishment():
    payload = parse(EstablishmentInput, _body())
    result = get_establishment_service().register(
        current_user, payload.establishment_name, payload.dti_certificate_no,
    )
    return jsonify(result.to_dict()), 201


@owner_bp.route('/establishments/<uuid:establishment_id>')
@login_required
@role_required(UserRole.OWNER)
def get_establishment(establishment_id):
    return jsonify(get_establishment_service().get(current_user, establishment_id))


@owner_bp.route('/establishments/<uuid:establishment_id>/resubmit', methods=['POST'])
@login_required
@role_required(UserRole.OWNER)
def resubmit_establishment(establishment_id):
    return jsonify(get_establishment_service().resubmit(current_user, establishment_id).to_dict())


# Applications

@owner_bp.route('/applications')
@login_required
@role_required(UserRole.OWNER)
def list_applications():
    return jsonify({'applications': get_application_service().list_for_owner(current_user)})


@owner_bp.route('/applications/types')
@login_required
@role_required(UserRole.OWNER)
def application_types():
    return jsonify({'types': [
        {'value': t.value, 'label': t.label, 'description': t.description} for t in ApplicationType
    ]})


@owner_bp.route('/applications', methods=['POST'])
@login_required
@role_required(UserRole.OWNER)
def apply():
    payload = parse(ApplyRequest, _body())
    result = get_application_service().apply(current_user, payload.establishment_id, payload.type)
    data = result.to_dict()
    data['confirmation'] = f"/owner/applications/{data['data']['id']}/confirmation"
    return jsonify(data), 201


@owner_bp.route('/applications/<uuid:application_id>')
@login_required
@role_required(UserRole.OWNER)
def get_application(application_id):
    return jsonify(get_application_service().get(current_user, application_id))


@owner_bp.route('/applications/<uuid:application_id>/confirmation')
@login_required
@role_required(UserRole.OWNER)
def application_confirmation(application_id):
    application = get_application_service().get(current_user, application_id)
    return jsonify({
        'message': f"Your {application['type_label']} application for "
                   f"{application['establishment_name']} was received.",
        'application': application,
    })
