"""Identity and time helpers."""

from __future__ import annotations

import random
import uuid
from datetime import datetime, timezone


def now_iso_timestamp() -> str:
    """Return the current UTC time as ISO-8601 with millisecond precision.

    Example: ``2023-01-01T00:00:00.000Z``.
    """
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def generate_uuid() -> str:
    """Return a random version-4 UUID string.

    ``uuid.uuid4`` reads from ``os.urandom``.  On platforms without a secure
    random source ``os.urandom`` raises ``NotImplementedError`` and we fall
    back to :func:`_pseudo_random_uuid`, which is **not** cryptographically
    secure.  Such identifiers are fine for telling sessions apart but must never
    be used as secrets.
    """
    try:
        return str(uuid.uuid4())
    except NotImplementedError:
        return _pseudo_random_uuid()


def _pseudo_random_uuid() -> str:
    """Build a syntactically valid v4 UUID from the ``random`` module.

    Version nibble is ``4``, variant nibble is one of ``8``, ``9``, ``a``, ``b``.
    Not suitable for anything security-sensitive.
    """
    chars = []
    for c in "xxxxxxxx-xxxx-4xxx-yxxx-xxxxxxxxxxxx":
        if c == "x":
            chars.append(format(random.randrange(16), "x"))
        elif c == "y":
            chars.append(format(random.randrange(16) & 0x3 | 0x8, "x"))
        else:
            chars.append(c)
    return "".join(chars)
