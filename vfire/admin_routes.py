from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from .auth import role_required
from .container import (
    get_account_service,
    get_application_service,
    get_dashboard_service,
    get_establishment_service,
    get_inspection_service,
)
from .domain.exceptions import ValidationError
from .domain.statuses import ApplicationStatus, ApplicationType, EstablishmentStatus, UserRole
from .schemas import (
    ApproveApplicationRequest,
    CertificateRequest,
    CreateAdminRequest,
    CreateInspectorRequest,
    RejectRequest,
    RescheduleRequest,
    ScheduleRequest,
    parse,
)

admin_bp = Blueprint('admin', __name__, url_prefix='/admin')

APPLICATION_TYPES = 'any(fsec, "fsic-business", "fsic-occupancy")'


def _body():
    return request.get_json(silent=True) or {}


def _enum_arg(enum_cls, name):
    value = request.args.get(name)
    if not value:
        return None
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(f"Unknown {name} '{value}'", name)


@admin_bp.route('/dashboard')
@login_required
@role_required(UserRole.ADMIN)
def dashboard():
    return jsonify(get_dashboard_service().get_admin_dashboard(current_user))


# Users

@admin_bp.route('/users')
@login_required
@role_required(UserRole.ADMIN)
def list_users():
    role = _enum_arg(UserRole, 'role')
    return jsonify({'users': get_account_service().list_users(current_user, role=role)})


@admin_bp.route('/users/pending')
@login_required
@role_required(UserRole.ADMIN)
def list_pending_users():
    return jsonify({'users': get_account_service().list_pending_users(current_user)})


@admin_bp.route('/users/<uuid:profile_id>/approve', methods=['POST'])
@login_required
@role_required(UserRole.ADMIN)
def approve_user(profile_id):
    return jsonify(get_account_service().approve_user(current_user, profile_id).to_dict())


@admin_bp.route('/users/<uuid:profile_id>/reject', methods=['POST'])
@login_required
@role_required(UserRole.ADMIN)
def reject_user(profile_id):
    payload = parse(RejectRequest, _body())
    return jsonify(get_account_service().reject_user(current_user, profile_id, payload.reason).to_dict())


@admin_bp.route('/inspectors')
@login_required
@role_required(UserRole.ADMIN)
def list_inspectors():
    return jsonify({'inspectors': get_account_service().list_inspectors(current_user)})


@admin_bp.route('/inspectors', methods=['POST'])
@login_required
@role_required(UserRole.ADMIN)
def create_inspector():
    payload = parse(CreateInspectorRequest, _body())
    result = get_account_service().create_inspector(
        current_user,
        email=payload.email,
        first_name=payload.first_name,
        last_name=payload.last_name,
        position=payload.position,
        password=payload.password,
    )
    return jsonify(result.to_dict()), 201


@admin_bp.route('/admins', methods=['POST'])
@login_required
@role_required(UserRole.ADMIN)
def create_admin():
    payload = parse(CreateAdminRequest, _body())
    result = get_account_service().create_admin(
        payload.email, payload.password,
        first_name=payload.first_name, last_name=payload.last_name,
        actor=current_user,
    )
    return jsonify(result.to_dict()), 201


# Establishments

@admin_bp.route('/establishments')
@login_required
@role_required(UserRole.ADMIN)
def list_establishments():
    status = _enum_arg(EstablishmentStatus, 'status')
    return jsonify({'establishments': get_establishment_service().list_all(current_user, status=status)})


@admin_bp.route('/establishments/pending')
@login_required
@role_required(UserRole.ADMIN)
def list_pending_establishments():
    return jsonify({'establishments': get_establishment_service().list_pending(current_user)})


@admin_bp.route('/establishments/<uuid:establishment_id>')
@login_required
@role_required(UserRole.ADMIN)
def get_establishment(establishment_id):
    return jsonify(get_establishment_service().get(current_user, establishment_id))


@admin_bp.route('/establishments/<uuid:establishment_id>/approve', methods=['POST'])
@login_required
@role_required(UserRole.ADMIN)
def approve_establishment(establishment_id):
    return jsonify(get_establishment_service().approve(current_user, establishment_id).to_dict())


@admin_bp.route('/establishments/<uuid:establishment_id>/reject', methods=['POST'])
@login_required
@role_required(UserRole.ADMIN)
def reject_establishment(establishment_id):
    payload = parse(RejectRequest, _body())
    return jsonify(get_establishment_service().reject(current_user, establishment_id, payload.reason).to_dict())


# Applications

@admin_bp.route(f'/applications/<{APPLICATION_TYPES}:application_type>')
@login_required
@role_required(UserRole.ADMIN)
def list_applications(application_type):
    application_type = ApplicationType(application_type)
    status = _enum_arg(ApplicationStatus, 'status')
    return jsonify({
        'type': application_type.value,
        'label': application_type.label,
        'description': application_type.description,
        'applications': get_application_service().list_by_type(current_user, application_type, status=status),
    })


@admin_bp.route('/applications/<uuid:application_id>')
@login_required
@role_required(UserRole.ADMIN)
def get_application(application_id):
    return jsonify(get_application_service().get(current_user, application_id))


@admin_bp.route('/applications/<uuid:application_id>/schedule', methods=['POST'])
@login_required
@role_required(UserRole.ADMIN)
def schedule_application(application_id):
    payload = parse(ScheduleRequest, _body())
    result = get_application_service().schedule(
        current_user, application_id, payload.inspector_id, payload.inspection_schedule,
    )
    return jsonify(result.to_dict())


@admin_bp.route('/applications/<uuid:application_id>/reschedule', methods=['POST'])
@login_required
@role_required(UserRole.ADMIN)
def reschedule_application(application_id):
    payload = parse(RescheduleRequest, _body())
    result = get_application_service().reschedule(
        current_user, application_id,
        inspector_id=payload.inspector_id, inspection_schedule=payload.inspection_schedule,
    )
    return jsonify(result.to_dict())


@admin_bp.route('/applications/<uuid:application_id>/approve', methods=['POST'])
@login_required
@role_required(UserRole.ADMIN)
def approve_application(application_id):
    payload = parse(ApproveApplicationRequest, _body())
    result = get_application_service().approve(current_user, application_id, certificate_url=payload.certificate_url)
    return jsonify(result.to_dict())


@admin_bp.route('/applications/<uuid:application_id>/reject', methods=['POST'])
@login_required
@role_required(UserRole.ADMIN)
def reject_application(application_id):
    payload = parse(RejectRequest, _body())
    return jsonify(get_application_service().reject(current_user, application_id, payload.reason).to_dict())


@admin_bp.route('/applications/<uuid:application_id>/certificate', methods=['POST'])
@login_required
@role_required(UserRole.ADMIN)
def issue_certificate(application_id):
    payload = parse(CertificateRequest, _body())
    result = get_application_service().issue_certificate(current_user, application_id, payload.certificate_url)
    return jsonify(result.to_dict())


# Inspections

@admin_bp.route('/inspections')
@login_required
@role_required(UserRole.ADMIN)
def list_inspections():
    return jsonify({'inspections': get_inspection_service().list_all(current_user)})


@admin_bp.route('/inspections/<uuid:application_id>/checklist')
@login_required
@role_required(UserRole.ADMIN)
def get_checklist(application_id):
    return jsonify(get_inspection_service().get_checklist(current_user, application_id))
