"""Phone number display formatting. Stored numbers are kept exactly as typed."""

import phonenumbers


def format_phone_for_display(raw: str, default_region: str | None = None) -> str:
    """Return the number in international format, or raw unchanged if it cannot be parsed.

    Use default_region when the input has no leading + (e.g. "202 555 1234"
    with default_region "US"). Without a region such numbers stay as typed.
    """
    if not raw or not raw.strip():
        return raw
    try:
        parsed = phonenumbers.parse(raw.strip(), default_region or None)
    except phonenumbers.NumberParseException:
        return raw
    if not phonenumbers.is_valid_number(parsed):
        return raw
    return phonenumbers.format_number(
        parsed, phonenumbers.PhoneNumberFormat.INTERNATIONAL
    )
