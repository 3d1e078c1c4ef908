"""
Cursor-based pagination utilities.

Provides encode/decode functions for creating opaque cursor strings
that can be used for stable pagination through result sets.

A cursor wraps exactly one ordering key (the document ObjectId). The
encoding is url-safe base64 of the key's hex form: opaque to clients,
not meant to be tamper-proof.
"""

import base64
import binascii
import re

from bson import ObjectId
from bson.errors import InvalidId

from src.domain.exceptions import InvalidCursor
from src.utils.logging import make_logger

logger = make_logger(__name__)

_OBJECT_ID_HEX = re.compile(r"[0-9a-fA-F]{24}")


def encode_cursor(key: ObjectId | str) -> str:
    """
    Encode an ordering key into an opaque cursor string.

    Args:
        key: The document ObjectId, or its 24 character hex form

    Returns:
        Base64-encoded cursor string
    """
    return base64.urlsafe_b64encode(str(key).encode()).decode()


def decode_cursor(cursor: str) -> ObjectId:
    """
    Decode cursor string back to the ordering key it was built from.

    Args:
        cursor: Base64-encoded cursor string

    Returns:
        The ObjectId the cursor points at

    Raises:
        InvalidCursor: If the cursor is empty, not base64, or does not wrap an ObjectId
    """
    if not cursor:
        raise InvalidCursor("Cursor must be a non-empty string")

    try:
        raw = base64.b64decode(cursor.encode("ascii"), altchars=b"-_", validate=True)
        key_hex = raw.decode("ascii")
        # ObjectId() tolerates whitespace in hex input, so check the form first
        if not _OBJECT_ID_HEX.fullmatch(key_hex):
            raise InvalidId(f"{key_hex!r} is not a 24 character hex ObjectId")
        return ObjectId(key_hex)
    except (binascii.Error, UnicodeError, InvalidId, TypeError) as e:
        logger.info(f"Rejected malformed cursor {cursor!r}: {e}")
        raise InvalidCursor("Invalid cursor format", detail=str(e)) from e
