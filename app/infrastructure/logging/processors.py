"""Structlog processors for localization logging.

Locale candidates come straight from request headers, cookies and query
strings, so their length is attacker controlled.
"""

from typing import Any, Iterable, Optional

# Event keys holding raw request input
REQUEST_VALUE_KEYS = ("candidate", "locale", "key")


def truncate_request_values(
    max_length: int = 256,
    keys: Optional[Iterable[str]] = REQUEST_VALUE_KEYS,
):
    """Create a processor that truncates raw request values in log entries.

    Args:
        max_length: Maximum string length before truncation.
        keys: Event keys to inspect. None inspects every string value.

    Returns:
        A structlog processor function.

    Example:
        processors.append(truncate_request_values(max_length=128))
    """
    watched = None if keys is None else frozenset(keys)

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        for key, value in event_dict.items():
            if watched is not None and key not in watched:
                continue
            if isinstance(value, str) and len(value) > max_length:
                event_dict[key] = (
                    value[:max_length] + f"...[truncated, {len(value)} chars total]"
                )
        return event_dict

    return processor
