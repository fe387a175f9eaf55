# apps/utils/tests.py
import json
import logging

from django.test import TestCase
from rest_framework.exceptions import ValidationError

from .logging import JSONFormatter
from .validators import validate_phone, is_valid_email, password_strength_errors


class ValidatorTests(TestCase):
    def test_phone_validator(self):
        self.assertEqual(validate_phone("+919876543210"), "+919876543210")
        with self.assertRaises(ValidationError):
            validate_phone("123")

    def test_email_validator(self):
        self.assertTrue(is_valid_email("asha@example.com"))
        self.assertFalse(is_valid_email("asha@example"))
        self.assertFalse(is_valid_email("asha example.com"))
        self.assertFalse(is_valid_email(None))

    def test_password_strength(self):
        self.assertEqual(password_strength_errors("Str0ng!Pass"), [])

        errors = password_strength_errors("weak")
        self.assertIn("Must be at least 8 characters long.", errors)
        self.assertIn("Must contain at least one uppercase letter.", errors)
        self.assertIn("Must contain at least one number.", errors)
        self.assertIn("Must contain at least one special character.", errors)
        self.assertNotIn("Must contain at least one lowercase letter.", errors)


class JSONFormatterTests(TestCase):
    def test_redacts_nested_secrets(self):
        record = logging.LogRecord(
            name="apps.payments", level=logging.INFO, pathname=__file__, lineno=1,
            msg={"integration": "Razorpay", "settings": {"apiKey": "rzp_live", "apiSecret": "s3cr3t"}},
            args=None, exc_info=None,
        )
        payload = json.loads(JSONFormatter().format(record))

        self.assertEqual(payload["lvl"], "INFO")
        self.assertNotIn("s3cr3t", payload["msg"])
        self.assertNotIn("rzp_live", payload["msg"])
        self.assertIn("REDACTED", payload["msg"])

    def test_includes_context_fields(self):
        record = logging.LogRecord(
            name="apps.orders", level=logging.WARNING, pathname=__file__, lineno=1,
            msg="placed", args=None, exc_info=None,
        )
        record.order_id = "abc"
        payload = json.loads(JSONFormatter().format(record))
        self.assertEqual(payload["order_id"], "abc")
