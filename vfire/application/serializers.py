"""JSON-ready dicts for ORM rows."""
from vfire.domain.workflow import next_status


def _iso(value):
    return value.isoformat() if value is not None else None


def _enum(value):
    return value.value if hasattr(value, 'value') else value


def profile_dict(profile):
    if profile is None:
        return None
    return {
        'id': str(profile.id),
        'email': profile.email,
        'first_name': profile.first_name,
        'middle_name': profile.middle_name,
        'last_name': profile.last_name,
        'full_name': profile.full_name,
        'position': profile.position,
        'role': _enum(profile.role),
        'account_status': _enum(profile.account_status),
        'rejection_reason': profile.rejection_reason,
        'must_change_password': bool(profile.must_change_password),
        'created_at': _iso(profile.created_at),
    }


def establishment_dict(establishment, with_owner=False, latest_application=None):
    data = {
        'id': str(establishment.id),
        'owner_id': str(establishment.owner_id),
        'establishment_name': establishment.establishment_name,
        'dti_certificate_no': establishment.dti_certificate_no,
        'status': _enum(establishment.status),
        'rejection_reason': establishment.rejection_reason,
        'created_at': _iso(establishment.created_at),
        'updated_at': _iso(establishment.updated_at),
    }
    if with_owner and establishment.owner is not None:
        data['owner'] = {
            'id': str(establishment.owner.id),
            'full_name': establishment.owner.full_name,
            'email': establishment.owner.email,
        }
    if latest_application is not None:
        data['latest_application'] = application_dict(latest_application)
    return data


def application_dict(application, with_checklist=False):
    status = application.status
    following = next_status(status)
    data = {
        'id': str(application.id),
        'establishment_id': str(application.establishment_id),
        'owner_id': str(application.owner_id),
        'type': _enum(application.type),
        'type_label': application.type.label,
        'status': _enum(status),
        'next_step': following.value if following else None,
        'establishment_name': application.establishment_name,
        'dti_certificate_no': application.dti_certificate_no,
        'application_date': _iso(application.application_date),
        'application_time': _iso(application.application_time),
        'inspection_schedule': _iso(application.inspection_schedule),
        'inspector_id': str(application.inspector_id) if application.inspector_id else None,
        'inspector_name': application.inspector.full_name if application.inspector is not None else None,
        'certificate_url': application.certificate_url,
        'rejection_reason': application.rejection_reason,
        'created_at': _iso(application.created_at),
        'updated_at': _iso(application.updated_at),
    }
    if with_checklist:
        data['checklist'] = checklist_dict(application.checklist) if application.checklist else None
    return data


def checklist_dict(checklist):
    return {
        'id': str(checklist.id),
        'application_id': str(checklist.application_id),
        'inspector_id': str(checklist.inspector_id),
        'inspection_date': _iso(checklist.inspection_date),
        'inspection_time': _iso(checklist.inspection_time),
        'checklist_items': checklist.checklist_items,
        'inspection_status': _enum(checklist.inspection_status),
        'inspector_signature': checklist.inspector_signature,
        'remarks': checklist.remarks,
        'submitted_at': _iso(checklist.submitted_at),
    }
