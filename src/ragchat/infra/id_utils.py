"""Prefixed ID generation.

All IDs minted by the library use a ``{prefix}_{random}`` format so that
any ID can be visually identified by its origin:

- ``evt_a8Kx3nQ9mP2r``   -- tracing correlation event (one per turn)
- ``node_L7wBd4Fj9Ks2``  -- retrieved text node without an upstream ID
"""

import secrets
import string

_ALPHABET = string.ascii_letters + string.digits  # a-z A-Z 0-9
_DEFAULT_LENGTH = 12  # ~71 bits of entropy

PREFIX_EVENT = "evt"
PREFIX_NODE = "node"


def generate_id(prefix: str, length: int = _DEFAULT_LENGTH) -> str:
    """Generate a prefixed random ID.

    Args:
        prefix: Short descriptor (e.g. ``"evt"``, ``"node"``).
        length: Number of random alphanumeric characters after the prefix.

    Returns:
        ``"{prefix}_{random}"`` string.
    """
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(length))
    return f"{prefix}_{suffix}"
