import logging

from flask import Flask, g, jsonify, request
from flask_login import current_user, login_required
from flask_wtf.csrf import CSRFError, CSRFProtect
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix

from . import database
from .config import config
from .container import get_application_service, get_calendar_service, get_session_state, teardown_uow
from .domain.access import navigation_for
from .domain.exceptions import (
    BusinessRuleViolationError,
    DomainError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from .error_codes import ErrorCode
from .infrastructure.security.rate_limiter import init_limiter
from .logging_config import configure_logging

logger = logging.getLogger(__name__)

csrf = CSRFProtect()

STATUS_BY_ERROR = (
    (ValidationError, 400),
    (UnauthorizedError, 403),
    (NotFoundError, 404),
    (BusinessRuleViolationError, 409),
)


def status_for(error: DomainError) -> int:
    for error_cls, status in STATUS_BY_ERROR:
        if isinstance(error, error_cls):
            return status
    return 400


def _rollback():
    uow = g.get('uow')
    if uow is not None:
        uow.rollback()


def register_error_handlers(app):

    @app.errorhandler(DomainError)
    def handle_domain_error(e):
        _rollback()
        status = status_for(e)
        entry = ErrorCode.get_error(e)
        body = {'error': e.code, 'code': entry['code'], 'message': e.message}
        if getattr(e, 'field', None):
            body['field'] = e.field
        log = logger.warning if status >= 403 else logger.info
        log(f"{e.code}: {e.message}", extra={'props': {'path': request.path, 'status': status}})
        return jsonify(body), status

    @app.errorhandler(CSRFError)
    def handle_csrf_error(e):
        return jsonify({'error': 'csrf_failed', 'code': ErrorCode.ERR_1002['code'], 'message': e.description}), 400

    @app.errorhandler(429)
    def handle_rate_limit(e):
        entry = ErrorCode.ERR_9002
        return jsonify({'error': 'rate_limited', 'code': entry['code'], 'message': entry['user_msg']}), 429

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({'error': e.name.lower().replace(' ', '_'), 'code': None, 'message': e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        _rollback()
        entry = ErrorCode.get_error(e)
        logger.error(f"Unhandled error on {request.method} {request.path}: {e}", exc_info=True)
        return jsonify({'error': 'internal_error', 'code': entry['code'], 'message': entry['user_msg']}), 500


def register_shared_routes(app):

    @app.route('/')
    def index():
        """Where the client should go: the role dashboard, or the login page."""
        state = get_session_state()
        return jsonify({'app': 'V-FIRE Inspect', 'redirect': state.home_path, 'authenticated': state.is_authenticated})

    @app.route('/health')
    def health():
        return jsonify({'status': 'ok'})

    @app.route('/profile')
    @login_required
    def profile():
        return jsonify(get_session_state().to_dict())

    @app.route('/navigation')
    @login_required
    def navigation():
        state = get_session_state()
        return jsonify({'home': state.home_path, 'groups': [group.to_dict() for group in navigation_for(state.role)]})

    @app.route('/calendar')
    @login_required
    def calendar():
        year = request.args.get('year', type=int)
        month = request.args.get('month', type=int)
        return jsonify(get_calendar_service().get_month(current_user, year=year, month=month))

    @app.route('/applications/<uuid:application_id>/certificate')
    @login_required
    def certificate(application_id):
        return jsonify(get_application_service().get_certificate(current_user, application_id))


def register_cli(app):
    from .cli import create_admin_command, init_db_command, seed_demo_command

    app.cli.add_command(init_db_command)
    app.cli.add_command(create_admin_command)
    app.cli.add_command(seed_demo_command)


def create_app(config_overrides=None):
    """Application factory. ``config_overrides`` wins over environment settings."""
    settings = config.as_flask_config()
    if config_overrides:
        settings.update(config_overrides)

    configure_logging(settings.get('LOG_LEVEL', 'INFO'), settings.get('LOG_JSON', True))

    app = Flask(__name__)
    app.config.from_mapping(settings)

    # Behind a load balancer (HTTPS / CSRF)
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    csrf.init_app(app)
    init_limiter(app)

    from .auth import auth_bp, login_manager
    from .admin_routes import admin_bp
    from .inspector_routes import inspector_bp
    from .owner_routes import owner_bp

    login_manager.init_app(app)

    database.init_db(app.config['DATABASE_URL'])
    if app.config.get('CREATE_TABLES'):
        database.create_all()

    app.register_blueprint(auth_bp, url_prefix='/auth')
    app.register_blueprint(admin_bp)
    app.register_blueprint(inspector_bp)
    app.register_blueprint(owner_bp)
    logger.info("Blueprints registered: auth, admin, inspector, owner")

    register_shared_routes(app)
    register_error_handlers(app)
    register_cli(app)

    app.teardown_appcontext(teardown_uow)
    app.teardown_appcontext(database.remove_session)

    return app
