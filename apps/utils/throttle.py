from rest_framework.throttling import UserRateThrottle, AnonRateThrottle


class BurstRateThrottle(UserRateThrottle):
    """
    Short-window cap for authenticated and anonymous callers alike.
    """
    scope = 'burst'


class SustainedRateThrottle(UserRateThrottle):
    """
    General API usage.
    """
    scope = 'user'


class LoginRateThrottle(AnonRateThrottle):
    """
    Strict IP-based throttling for login and registration.
    """
    scope = 'login'
