"""Strongly typed identifiers for comment tree entities."""

from typing import NewType
from uuid import UUID

from commenttree.domain.error import ValidationError

CommentId = NewType("CommentId", UUID)


def parse_comment_id(value: str, field: str = "id") -> CommentId:
    """Parse a canonical UUID string into a CommentId.

    Only the 36-character hyphenated form is accepted (either case); the
    braced, ``urn:uuid:`` and bare 32-hex spellings are rejected.

    Args:
        value: Identifier as received from the client
        field: Field name used in the error message

    Returns:
        Parsed comment identifier

    Raises:
        ValidationError: If value is not a canonical UUID
    """
    try:
        parsed = UUID(value)
    except (ValueError, TypeError, AttributeError) as e:
        raise ValidationError(f"invalid {field}: {value!r}") from e
    if str(parsed) != value.lower():
        raise ValidationError(f"invalid {field}: {value!r}")
    return CommentId(parsed)
