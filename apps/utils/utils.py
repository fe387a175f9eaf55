import time
from django.utils import timezone


def now():
    return timezone.now()


def epoch_millis() -> int:
    return int(time.time() * 1000)


def dict_clean(d: dict):
    """
    Remove keys where value is None or empty
    """
    return {k: v for k, v in d.items() if v not in [None, "", [], {}]}
