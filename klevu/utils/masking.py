"""
Masking of secret material before it reaches logs.
"""

from typing import Any, Mapping

MASKED_HEADER_VALUE = "********"

# Compared case-insensitively
MASKED_HEADER_KEYS = frozenset({
    "x-klevu-restapikey",
    "restapikey",
    "authorization",
})


def mask_secret(secret: str | None, visible_characters: int = 3) -> str:
    """
    Mask a secret, keeping only its first few characters.

    >>> mask_secret("ABCDE1234567890")
    'ABC*******'
    """
    return f"{(secret or '')[:visible_characters]}*******"


def mask_http_headers(headers: Mapping[str, Any]) -> dict[str, Any]:
    """
    Copy a header map with secret header values replaced.

    Multi-valued headers keep their shape; each value is masked.
    """
    masked: dict[str, Any] = {}
    for key, value in headers.items():
        if key.lower() not in MASKED_HEADER_KEYS:
            masked[key] = value
        elif isinstance(value, (list, tuple)):
            masked[key] = [MASKED_HEADER_VALUE for _ in value]
        else:
            masked[key] = MASKED_HEADER_VALUE
    return masked
