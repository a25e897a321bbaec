import logging

from utils.logging_config import SecretMaskingFilter


def make_record(msg, args=()):
    return logging.LogRecord("test", logging.INFO, __file__, 1, msg, args, None)


class TestSecretMaskingFilter:

    def test_masks_email_in_message(self):
        record = make_record("Contact Form Submission: Email: ada@example.com")

        assert SecretMaskingFilter().filter(record) is True
        assert record.msg == "Contact Form Submission: Email: [REDACTED_EMAIL]"

    def test_masks_phone_number(self):
        assert "[REDACTED_PHONE]" in SecretMaskingFilter().mask("call me at +1 555-123-4567 tomorrow")

    def test_masks_bearer_token(self):
        masked = SecretMaskingFilter().mask("Authorization: Bearer abc.def-123")

        assert masked == "Authorization: Bearer [REDACTED_BEARER_TOKEN]"

    def test_masks_string_args(self):
        record = make_record("submitted by %s (%d)", ("ada@example.com", 3))

        SecretMaskingFilter().filter(record)

        assert record.args == ("[REDACTED_EMAIL]", 3)
        assert record.getMessage() == "submitted by [REDACTED_EMAIL] (3)"

    def test_order_ids_untouched(self):
        message = "Created order 42 with 3 line item(s) for user 0b1c2d3e-aaaa-bbbb-cccc-123456789abc"

        assert SecretMaskingFilter().mask(message) == message
