"""Tests for log redaction."""

import logging

from booking_pricing.security.logging_filters import (
    SensitiveFilter,
    install_sensitive_filter,
    redact,
)


def test_redact_masks_keys_headers_and_cards() -> None:
    message = (
        "Authorization: Bearer abc.def-123 key=sk_live_9aZ card 4111 1111 1111 1111"
    )
    scrubbed = redact(message)
    assert "abc.def-123" not in scrubbed
    assert "sk_live_9aZ" not in scrubbed
    assert "4111" not in scrubbed
    assert scrubbed.count("**REDACTED**") == 3


def test_redact_keeps_booking_details() -> None:
    message = "Quote for room 101 from 2024-06-01 to 2024-06-04 total 3140.00"
    assert redact(message) == message


def test_filter_scrubs_message_arguments() -> None:
    record = logging.LogRecord(
        "booking_pricing", logging.INFO, __file__, 1, "paid with %s", ("pk_test_abc",), None
    )
    assert SensitiveFilter().filter(record)
    assert record.getMessage() == "paid with **REDACTED**"


def test_install_is_idempotent() -> None:
    install_sensitive_filter("booking_pricing.test")
    install_sensitive_filter("booking_pricing.test")
    filters = logging.getLogger("booking_pricing.test").filters
    assert sum(isinstance(flt, SensitiveFilter) for flt in filters) == 1
