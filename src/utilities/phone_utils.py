import re
from typing import Optional

PHONE_MASK = "***"


def is_valid_phone(phone, country_code: str = "254") -> bool:
    """
    Check that a phone number is in international format <country_code>XXXXXXXXX.

    Exactly 9 digits must follow the country code, nothing else is accepted:
    no leading +, no spaces, no local 0 prefix.
      Example: 254712345678 -> True
      Example: 0712345678   -> False
    """
    if not isinstance(phone, str) or not phone:
        return False
    pattern = rf"{re.escape(country_code)}[0-9]{{9}}"
    return re.fullmatch(pattern, phone) is not None


def mask_phone(phone: Optional[str]) -> Optional[str]:
    """
    Mask a phone number for display (254712345678 -> 254712***678).

    Keeps the first 6 and last 3 characters. Numbers shorter than 10
    characters are returned unchanged.
    """
    if not phone or len(phone) < 10:
        return phone
    return phone[:6] + PHONE_MASK + phone[-3:]
