import re
from rest_framework import serializers

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
SPECIAL_CHARS = re.compile(r'[!@#$%^&*(),.?":{}|<>]')


def validate_phone(value):
    pattern = r"^\+?\d{10,15}$"
    if not re.match(pattern, str(value)):
        raise serializers.ValidationError("Invalid phone number format.")
    return value


def is_valid_email(value) -> bool:
    return bool(EMAIL_PATTERN.match(str(value or "")))


def password_strength_errors(password: str) -> list:
    """
    Returns the list of unmet password rules (empty list == strong enough).
    """
    errors = []
    if len(password) < 8:
        errors.append("Must be at least 8 characters long.")
    if not re.search(r"[A-Z]", password):
        errors.append("Must contain at least one uppercase letter.")
    if not re.search(r"[a-z]", password):
        errors.append("Must contain at least one lowercase letter.")
    if not re.search(r"[0-9]", password):
        errors.append("Must contain at least one number.")
    if not SPECIAL_CHARS.search(password):
        errors.append("Must contain at least one special character.")
    return errors
