"""
Presence checks for request fields.

A field is present when it is defined and is not the empty string. Falsy
values such as ``0`` or ``False`` are present: an age of 0 is a real age.
"""
import logging
from typing import Any, Iterable, List, Mapping, Optional

from core.exceptions import MissingFieldsError

logger = logging.getLogger(__name__)


def is_present(value: Any) -> bool:
    """Return True if a value counts as supplied."""
    return value is not None and value != ""


def find_missing_fields(values: Mapping[str, Any], required: Iterable[str]) -> List[str]:
    """
    List required field names that are absent or empty, in ``required`` order.

    Args:
        values: Field values keyed by field name.
        required: Names that must be present.
    """
    return [name for name in required if not is_present(values.get(name))]


def validate_required_fields(
    values: Mapping[str, Any],
    required: Iterable[str],
    message: Optional[str] = None
) -> None:
    """
    Ensure every required field is present.

    Raises:
        MissingFieldsError: 400 listing the missing field names.
    """
    missing = find_missing_fields(values, required)
    if missing:
        logger.info("Rejected request with missing fields", extra={"missing_fields": missing})
        raise MissingFieldsError(missing_fields=missing, message=message)
