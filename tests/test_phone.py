"""Tests for phone number display formatting."""

from contactbook.infrastructure.phone import format_phone_for_display


def test_with_country_code_formats_international():
    assert format_phone_for_display("+393123456789") == "+39 312 345 6789"
    assert format_phone_for_display("+12025551234") == "+1 202-555-1234"


def test_without_country_code_uses_default_region():
    assert format_phone_for_display("202 555 1234", default_region="US") == "+1 202-555-1234"
    assert format_phone_for_display("312 345 6789", default_region="IT") == "+39 312 345 6789"


def test_unparseable_returned_unchanged():
    assert format_phone_for_display("") == ""
    assert format_phone_for_display("   ") == "   "
    assert format_phone_for_display("abc") == "abc"
    assert format_phone_for_display("123", default_region="US") == "123"
    assert format_phone_for_display("202 555 1234") == "202 555 1234"
