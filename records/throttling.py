from rest_framework.throttling import AnonRateThrottle


class LoginRateThrottle(AnonRateThrottle):
    """Per-IP limit on login attempts, rate from ``DEFAULT_THROTTLE_RATES['login']``."""
    scope = 'login'
