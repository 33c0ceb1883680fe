"""
Conversion between ORM rows and domain entities.

Services load a row, turn it into an entity, let the entity apply the
business rule, then copy the mutable fields back onto the row before
committing.
"""
from vfire import models_db
from vfire.domain import entities
from vfire.domain.value_objects import DtiNumber, Email


# Profile

def profile_to_entity(row: models_db.Profile) -> entities.Profile:
    return entities.Profile(
        id=row.id,
        created_at=row.created_at,
        updated_at=row.updated_at,
        email=Email(row.email),
        first_name=row.first_name,
        last_name=row.last_name,
        middle_name=row.middle_name,
        position=row.position,
        role=row.role,
        account_status=row.account_status,
        rejection_reason=row.rejection_reason,
        must_change_password=row.must_change_password,
    )


def profile_to_row(entity: entities.Profile, password_hash=None) -> models_db.Profile:
    return models_db.Profile(
        id=entity.id,
        email=str(entity.email),
        password_hash=password_hash,
        first_name=entity.first_name,
        middle_name=entity.middle_name,
        last_name=entity.last_name,
        position=entity.position,
        role=entity.role,
        account_status=entity.account_status,
        rejection_reason=entity.rejection_reason,
        must_change_password=entity.must_change_password,
        created_at=entity.created_at,
    )


def apply_profile(entity: entities.Profile, row: models_db.Profile) -> models_db.Profile:
    row.account_status = entity.account_status
    row.rejection_reason = entity.rejection_reason
    row.must_change_password = entity.must_change_password
    return row


# Establishment

def establishment_to_entity(row: models_db.Establishment) -> entities.Establishment:
    return entities.Establishment(
        id=row.id,
        created_at=row.created_at,
        updated_at=row.updated_at,
        owner_id=row.owner_id,
        name=row.establishment_name,
        dti_certificate_no=DtiNumber(row.dti_certificate_no),
        status=row.status,
        rejection_reason=row.rejection_reason,
    )


def establishment_to_row(entity: entities.Establishment) -> models_db.Establishment:
    return models_db.Establishment(
        id=entity.id,
        owner_id=entity.owner_id,
        establishment_name=entity.name,
        dti_certificate_no=str(entity.dti_certificate_no),
        status=entity.status,
        rejection_reason=entity.rejection_reason,
        created_at=entity.created_at,
    )


def apply_establishment(entity: entities.Establishment, row: models_db.Establishment) -> models_db.Establishment:
    row.status = entity.status
    row.rejection_reason = entity.rejection_reason
    return row


# Application

def application_to_entity(row: models_db.Application) -> entities.Application:
    return entities.Application(
        id=row.id,
        created_at=row.created_at,
        updated_at=row.updated_at,
        establishment_id=row.establishment_id,
        owner_id=row.owner_id,
        type=row.type,
        status=row.status,
        establishment_name=row.establishment_name,
        dti_certificate_no=row.dti_certificate_no,
        application_date=row.application_date,
        application_time=row.application_time,
        inspection_schedule=row.inspection_schedule,
        inspector_id=row.inspector_id,
        certificate_url=row.certificate_url,
        rejection_reason=row.rejection_reason,
    )


def application_to_row(entity: entities.Application) -> models_db.Application:
    return models_db.Application(
        id=entity.id,
        establishment_id=entity.establishment_id,
        owner_id=entity.owner_id,
        type=entity.type,
        status=entity.status,
        establishment_name=entity.establishment_name,
        dti_certificate_no=entity.dti_certificate_no,
        application_date=entity.application_date,
        application_time=entity.application_time,
        inspection_schedule=entity.inspection_schedule,
        inspector_id=entity.inspector_id,
        certificate_url=entity.certificate_url,
        rejection_reason=entity.rejection_reason,
        created_at=entity.created_at,
    )


def apply_application(entity: entities.Application, row: models_db.Application) -> models_db.Application:
    row.status = entity.status
    row.inspection_schedule = entity.inspection_schedule
    row.inspector_id = entity.inspector_id
    row.certificate_url = entity.certificate_url
    row.rejection_reason = entity.rejection_reason
    return row


# Checklist

def checklist_to_entity(row: models_db.InspectionChecklist) -> entities.InspectionChecklist:
    return entities.InspectionChecklist(
        id=row.id,
        application_id=row.application_id,
        inspector_id=row.inspector_id,
        inspection_date=row.inspection_date,
        inspection_time=row.inspection_time,
        checklist_items=row.checklist_items,
        result=row.inspection_status,
        inspector_signature=row.inspector_signature,
        remarks=row.remarks,
        submitted_at=row.submitted_at,
    )


def checklist_to_row(entity: entities.InspectionChecklist) -> models_db.InspectionChecklist:
    return models_db.InspectionChecklist(
        id=entity.id,
        application_id=entity.application_id,
        inspector_id=entity.inspector_id,
        inspection_date=entity.inspection_date,
        inspection_time=entity.inspection_time,
        checklist_items=entity.checklist_items,
        inspection_status=entity.result,
        inspector_signature=entity.inspector_signature,
        remarks=entity.remarks,
        submitted_at=entity.submitted_at,
    )
