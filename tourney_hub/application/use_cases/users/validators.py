"""Common validation helpers for user use cases."""

import re

_USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]{3,50}$")


def normalize_username(username: str) -> str:
    """Return ``username`` stripped of whitespace or raise ``ValueError``."""

    normalized = username.strip()
    if not _USERNAME_PATTERN.match(normalized):
        raise ValueError(
            "Username must be 3-50 characters of letters, digits, '.', '_' or '-'"
        )
    return normalized
