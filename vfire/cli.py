"""
Management commands.

    flask --app vfire.app init-db
    flask --app vfire.app create-admin admin@bfp.gov.ph
    flask --app vfire.app seed-demo
"""
import uuid
from datetime import timedelta

import click
from flask.cli import FlaskGroup, with_appcontext

from . import database
from .config import config
from .domain.entities import utcnow
from .domain.exceptions import DomainError
from .domain.statuses import ApplicationType
from .logging_config import configure_cli_logging
from .repositories.unit_of_work import UnitOfWork

DEMO_PASSWORD = "Demo12345"

DEMO_OWNER = {
    "first_name": "Maria",
    "middle_name": "Santos",
    "last_name": "Reyes",
    "email": "owner@demo.vfire.ph",
}

DEMO_ESTABLISHMENTS = [
    {"establishment_name": "Reyes Bakery", "dti_certificate_no": "DTI-2024-000101"},
    {"establishment_name": "Reyes Hardware & Supply", "dti_certificate_no": "DTI-2024-000102"},
    {"establishment_name": "Sunrise Carinderia", "dti_certificate_no": "DTI-2024-000103"},
]


def _uow():
    if database.db_session is None:
        database.init_db()
    return UnitOfWork(database.db_session())


@click.command("init-db")
@with_appcontext
def init_db_command():
    """Create missing tables."""
    log = configure_cli_logging(config.LOG_LEVEL)
    database.create_all()
    log.info("tables_created", url=str(database.engine.url.render_as_string(hide_password=True)))


@click.command("create-admin")
@click.argument("email")
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
@click.option("--first-name", default="Admin")
@click.option("--last-name", default="User")
@with_appcontext
def create_admin_command(email, password, first_name, last_name):
    """Create an admin account."""
    from .application.account_service import AccountService

    log = configure_cli_logging(config.LOG_LEVEL)
    with _uow() as uow:
        try:
            result = AccountService(uow).create_admin(email, password, first_name=first_name, last_name=last_name)
        except DomainError as e:
            log.error("create_admin_failed", email=email, code=e.code, reason=e.message)
            raise click.ClickException(e.message)
    log.info("admin_created", email=email, profile_id=result.data["id"])


@click.command("seed-demo")
@with_appcontext
def seed_demo_command():
    """Demo accounts and records covering every application status."""
    log = configure_cli_logging(config.LOG_LEVEL)
    with _uow() as uow:
        try:
            summary = seed_demo(uow)
        except DomainError as e:
            log.error("seed_failed", code=e.code, reason=e.message)
            raise click.ClickException(e.message)
    for key, value in summary.items():
        log.info("seeded", item=key, value=value)


def seed_demo(uow, now=None):
    """
    Build a small data set through the services: an admin, an inspector, an
    owner with three establishments and applications in several statuses.

    Returns a dict summarising what was created.
    """
    from .application import AccountService, ApplicationService, EstablishmentService, InspectionService
    from .schemas import ChecklistRequest, SignUpRequest

    now = now or utcnow()

    def clock():
        return now

    accounts = AccountService(uow)

    accounts.create_admin("admin@demo.vfire.ph", DEMO_PASSWORD, first_name="Demo", last_name="Admin")
    admin = uow.profiles.get_by_email("admin@demo.vfire.ph")

    accounts.create_inspector(admin, "inspector@demo.vfire.ph", "Jose", "Dela Cruz",
                              position="Fire Officer I", password=DEMO_PASSWORD)
    inspector = uow.profiles.get_by_email("inspector@demo.vfire.ph")
    inspector.must_change_password = False

    accounts.sign_up(SignUpRequest(
        **DEMO_OWNER,
        password=DEMO_PASSWORD,
        confirm_password=DEMO_PASSWORD,
        establishments=DEMO_ESTABLISHMENTS,
    ))
    owner = uow.profiles.get_by_email(DEMO_OWNER["email"])
    accounts.approve_user(admin, owner.id)

    establishments = EstablishmentService(uow)
    est_rows = uow.establishments.list_by_owner(owner.id)
    by_name = {e.establishment_name: e for e in est_rows}
    for name in ("Reyes Bakery", "Reyes Hardware & Supply"):
        establishments.approve(admin, by_name[name].id)

    applications = ApplicationService(uow, clock=clock)
    bakery = by_name["Reyes Bakery"].id
    hardware = by_name["Reyes Hardware & Supply"].id

    unscheduled, scheduled, inspected = (
        uuid.UUID(applications.apply(owner, est_id, app_type).data["id"])
        for est_id, app_type in (
            (bakery, ApplicationType.FSIC_BUSINESS),
            (hardware, ApplicationType.FSEC),
            (bakery, ApplicationType.FSIC_OCCUPANCY),
        )
    )

    for app_id, days in ((scheduled, 3), (inspected, 1)):
        applications.schedule(admin, app_id, inspector.id, now + timedelta(days=days))

    InspectionService(uow, applications=applications).submit_checklist(
        inspector,
        inspected,
        ChecklistRequest(
            inspection_date=(now + timedelta(days=1)).date(),
            inspection_time=(now + timedelta(days=1)).time().replace(microsecond=0),
            checklist_items={
                "fire_extinguishers": "compliant",
                "emergency_exits": "compliant",
                "smoke_detectors": "compliant",
                "electrical_wiring": "minor issues",
            },
            inspection_status="conditional",
            inspector_signature="J. Dela Cruz",
            remarks="Replace exposed wiring near the oven within 30 days.",
        ),
    )

    return {
        "admin": "admin@demo.vfire.ph",
        "inspector": "inspector@demo.vfire.ph",
        "owner": DEMO_OWNER["email"],
        "password": DEMO_PASSWORD,
        "establishments": len(est_rows),
        "applications": ", ".join(str(i) for i in (unscheduled, scheduled, inspected)),
    }


def _create_app():
    from .app import create_app
    return create_app()


cli = FlaskGroup(create_app=_create_app, add_default_commands=False)


if __name__ == "__main__":
    cli()
