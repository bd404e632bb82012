"""Input checks shared by the services."""

from typing import Optional

from ..core.exceptions import InvalidArgument

USERNAME_MAX_LENGTH = 64
TITLE_MAX_LENGTH = 200
BIO_MAX_LENGTH = 1000


def clean_text(
    value: str,
    field: str,
    max_length: Optional[int] = None,
    allow_blank: bool = False,
    trim: bool = False,
) -> str:
    """Enforce the field's constraints and return the value to store.

    Blankness and length are judged on the text without surrounding
    whitespace.  The value is stored exactly as given unless ``trim``
    is set.  Raises ``InvalidArgument`` if the value is not a string,
    is blank when ``allow_blank`` is false, or is longer than
    ``max_length``.
    """
    if not isinstance(value, str):
        raise InvalidArgument(f"{field} must be text")
    stripped = value.strip()
    if not stripped and not allow_blank:
        raise InvalidArgument(f"{field} must not be blank")
    if max_length is not None and len(stripped) > max_length:
        raise InvalidArgument(f"{field} must be {max_length} characters or fewer")
    return stripped if trim else value
