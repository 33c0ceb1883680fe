import logging
import uuid
from functools import wraps

from flask import Blueprint, jsonify, request
from flask_login import LoginManager, current_user, login_required, login_user, logout_user
from flask_wtf.csrf import generate_csrf

from .container import get_account_service, get_session_state, get_uow, set_session_state
from .domain.access import GateDecision, home_path_for, navigation_for, role_gate
from .infrastructure.security.rate_limiter import login_limit, signup_limit
from .schemas import ChangePasswordRequest, LoginRequest, SignUpRequest, parse

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__)
login_manager = LoginManager()
login_manager.login_view = 'auth.login'


@login_manager.user_loader
def load_user(user_id):
    try:
        return get_uow().profiles.get_by_id(_as_uuid(user_id))
    except ValueError:
        return None


@login_manager.unauthorized_handler
def unauthorized():
    return jsonify({
        'error': 'unauthenticated',
        'code': 'ERR_2001',
        'message': 'Please sign in to continue.',
        'redirect': home_path_for(None),
    }), 401


def _as_uuid(value):
    return value if isinstance(value, uuid.UUID) else uuid.UUID(str(value))


def gate_response(decision, state):
    """JSON rendition of a gate decision that is not ALLOW."""
    if decision == GateDecision.REDIRECT_LOGIN:
        return unauthorized()
    if decision == GateDecision.LOADING:
        return jsonify({'status': 'loading'}), 202
    return jsonify({
        'error': 'forbidden',
        'code': 'ERR_2002',
        'message': 'You do not have access to this page.',
        'redirect': state.home_path,
    }), 403


def role_required(role):
    """Restrict a route to exactly one role. There is no admin override."""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            state = get_session_state()
            decision = role_gate(role, state.role, state.is_loading, state.is_authenticated)
            if not decision.allowed:
                if decision == GateDecision.REDIRECT_DASHBOARD:
                    logger.warning(
                        "Role gate refused access",
                        extra={'props': {'path': request.path, 'required': str(role), 'role': str(state.role)}},
                    )
                return gate_response(decision, state)
            return f(*args, **kwargs)
        return decorated_function
    return decorator


def _json_body():
    return request.get_json(silent=True) or {}


@auth_bp.route('/csrf-token', methods=['GET'])
def csrf_token():
    return jsonify({'csrf_token': generate_csrf()})


@auth_bp.route('/register', methods=['POST'])
@signup_limit()
def register():
    """Owner sign-up with one or more establishments."""
    payload = parse(SignUpRequest, _json_body())
    result = get_account_service().sign_up(payload)
    return jsonify(result.to_dict()), 201


@auth_bp.route('/login', methods=['POST'])
@login_limit()
def login():
    if current_user.is_authenticated:
        state = get_session_state()
        return jsonify({'success': True, 'message': 'Already signed in.', 'session': state.to_dict()})

    payload = parse(LoginRequest, _json_body())
    profile = get_account_service().authenticate(payload.email, payload.password)
    login_user(profile, remember=bool(_json_body().get('remember')))
    state = set_session_state(profile)

    logger.info("Signed in", extra={'props': {'profile_id': str(profile.id), 'role': state.role.value}})
    return jsonify({'success': True, 'message': 'Signed in.', 'session': state.to_dict()})


@auth_bp.route('/logout', methods=['POST'])
@login_required
def logout():
    logout_user()
    set_session_state(None)
    return jsonify({'success': True, 'message': 'Signed out.', 'redirect': home_path_for(None)})


@auth_bp.route('/me', methods=['GET'])
def me():
    """Current user, profile and role. Anonymous callers get authenticated=false."""
    state = get_session_state()
    data = state.to_dict()
    if state.is_authenticated:
        data['navigation'] = [group.to_dict() for group in navigation_for(state.role)]
    return jsonify(data)


@auth_bp.route('/change-password', methods=['POST'])
@login_required
def change_password():
    payload = parse(ChangePasswordRequest, _json_body())
    result = get_account_service().change_password(current_user, payload.current_password, payload.new_password)
    data = result.to_dict()
    data['redirect'] = get_session_state().home_path
    return jsonify(data)


@auth_bp.before_app_request
def check_force_password_change():
    """Provisioned accounts must replace their temporary password before anything else."""
    if current_user.is_authenticated and current_user.must_change_password:
        if request.endpoint and 'static' in request.endpoint:
            return None

        allowed_endpoints = ['auth.logout', 'auth.change_password', 'auth.me', 'auth.csrf_token']
        if request.endpoint in allowed_endpoints:
            return None

        return jsonify({
            'error': 'password_change_required',
            'code': 'ERR_2002',
            'message': 'You need to change your temporary password before continuing.',
            'redirect': '/auth/change-password',
        }), 403
    return None
