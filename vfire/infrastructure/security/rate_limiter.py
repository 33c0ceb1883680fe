"""
Rate limits for the sign-in and sign-up endpoints.

The limiter is module level so blueprints can decorate routes before
``create_app`` binds it to an application.
"""

from flask import current_app
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# ProxyFix in create_app already puts the client address in remote_addr.
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["1000 per day", "200 per hour"],
    strategy="fixed-window",
)


def init_limiter(app):
    app.config.setdefault("RATELIMIT_STORAGE_URI", "memory://")
    limiter.init_app(app)


def _configured(key, default):
    return lambda: current_app.config.get(key, default)


def login_limit():
    """Sign-in attempts per client address (LOGIN_RATE_LIMIT, default 20 per minute)."""
    return limiter.limit(
        _configured("LOGIN_RATE_LIMIT", "20 per minute"),
        error_message="Too many sign-in attempts. Wait a minute.",
    )


def signup_limit():
    """Owner sign-ups per client address (SIGNUP_RATE_LIMIT, default 5 per minute)."""
    return limiter.limit(
        _configured("SIGNUP_RATE_LIMIT", "5 per minute"),
        error_message="Too many sign-up attempts. Wait a minute.",
    )
