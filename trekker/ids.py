"""
Identifier generation for stored entities.
"""

import secrets
import uuid

PREFIX_MAP = {
    "task": "TREK",
    "epic": "EPIC",
    "comment": "CMT",
}


def generate_id(entity_type: str, length: int = 8) -> str:
    """
    Generate a human-readable prefixed id, e.g. "TREK-a7f3c2e1".

    Args:
        entity_type: One of the keys of PREFIX_MAP
        length: Length of the random hex suffix (default 8)
    """
    prefix = PREFIX_MAP[entity_type]
    return f"{prefix}-{secrets.token_hex((length + 1) // 2)[:length]}"


def generate_uuid() -> str:
    return str(uuid.uuid4())
