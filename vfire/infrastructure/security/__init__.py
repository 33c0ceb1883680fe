from .rate_limiter import limiter, init_limiter, login_limit, signup_limit
