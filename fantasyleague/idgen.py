"""Generation of opaque identifiers."""

from __future__ import annotations

import secrets


class RandomIdGenerator:
    """Produces 128-bit random identifiers as lower-case hex strings."""

    def new_id(self) -> str:
        return secrets.token_hex(16)