"""API key generation from OS-provided cryptographic randomness.

Keys are 32 characters drawn from ``A-Z``, ``a-z`` and ``0-9``. Each random byte is
mapped onto the alphabet with ``byte % 62``, which slightly favours the first eight
symbols (5/256 instead of 4/256). Keys already deployed were produced this way, so the
mapping is the default. Pass ``unbiased=True`` to use rejection sampling instead.
"""

import hashlib
import logging
import secrets
import string
from collections.abc import Callable

from apikeygen.keys.errors import EntropyUnavailable

logger = logging.getLogger(__name__)

KEY_LENGTH = 32
ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits

# Largest multiple of len(ALPHABET) that fits in a byte (62 * 4)
_REJECTION_LIMIT = 256 - (256 % len(ALPHABET))

EntropySource = Callable[[int], bytes]


def _read_entropy(entropy: EntropySource, nbytes: int) -> bytes:
    """Read exactly ``nbytes`` from the entropy source."""
    try:
        data = entropy(nbytes)
    except (OSError, NotImplementedError) as e:
        raise EntropyUnavailable(detail=str(e)) from e

    if len(data) != nbytes:
        raise EntropyUnavailable(detail=f"Short read: expected {nbytes} bytes, got {len(data)}")
    return data


def generate_api_key(
    length: int = KEY_LENGTH,
    *,
    unbiased: bool = False,
    entropy: EntropySource | None = None,
) -> str:
    """Generate a random API key.

    Args:
        length: Number of characters in the key
        unbiased: Use rejection sampling for an exactly uniform distribution
        entropy: Callable returning ``n`` random bytes (default: ``secrets.token_bytes``)

    Returns:
        str: A ``length``-character key over ``ALPHABET``

    Raises:
        EntropyUnavailable: If the entropy source cannot be read
    """
    if length < 1:
        raise ValueError(f"Key length must be positive, got {length}")
    entropy = entropy or secrets.token_bytes

    if not unbiased:
        data = _read_entropy(entropy, length)
        key = "".join(ALPHABET[b % len(ALPHABET)] for b in data)
    else:
        chars: list[str] = []
        while len(chars) < length:
            for b in _read_entropy(entropy, length - len(chars)):
                if b < _REJECTION_LIMIT:
                    chars.append(ALPHABET[b % len(ALPHABET)])
        key = "".join(chars)

    logger.debug(f"Generated {length}-character key (hash: {fingerprint(key)})")
    return key


def fingerprint(key: str) -> str:
    """Short SHA-256 prefix of a key, safe to log."""
    return hashlib.sha256(key.encode()).hexdigest()[:8]
