"""Phone number helpers shared by the missed-call handler and the answer collector."""

import re

MOBILE_PREFIXES = ("+336", "+337", "06", "07")


def normalize_phone(raw: str) -> str:
    """Strip separators and turn a ``0033`` international prefix into ``+33``."""
    phone = re.sub(r"[\s.\-()]", "", raw or "")
    if phone.startswith("00"):
        phone = "+" + phone[2:]
    return phone


def is_mobile_number(phone: str) -> bool:
    return normalize_phone(phone).startswith(MOBILE_PREFIXES)
