"""Identifier Generator - 24-char hex ids shaped like a document database ObjectId.

Invariants:
    - Output is always exactly ID_LENGTH lowercase hex characters
    - First 8 chars encode seconds since epoch, the rest come from os.urandom
    - Infallible: no error conditions, no uniqueness bookkeeping
"""

import binascii
import os
import time

from messageboard.core.domain_types import DocumentId, ID_LENGTH


def generate_object_id() -> DocumentId:
    """Generate a 24-char hex string: time component + random component."""
    ts = int(time.time())
    rand = binascii.b2a_hex(os.urandom(8)).decode("ascii")
    return DocumentId(f"{ts:08x}{rand}".ljust(ID_LENGTH, "0")[:ID_LENGTH])


def same_id(left: object, right: object) -> bool:
    """Identifiers are equal iff their string forms match."""
    if left is None or right is None:
        return False
    return str(left) == str(right)
