# src/gateway_config/core/fingerprint.py

"""
Content fingerprint used to skip reloads of unchanged proxy.yaml text.
"""

from __future__ import annotations

import hashlib
from typing import Tuple


def compute_digest(raw_text: str) -> str:
    """Upper-case SHA-256 hex digest of the UTF-8 encoded text."""
    return hashlib.sha256(raw_text.encode("utf-8")).hexdigest().upper()


def should_skip(raw_text: str, previous_digest: str | None) -> Tuple[bool, str]:
    """
    Returns (skip, new_digest).

    skip is True only when the text hashes to `previous_digest`; a missing
    previous digest never matches. The caller stores `new_digest` once the
    text has actually been merged.
    """
    new_digest = compute_digest(raw_text)
    if previous_digest is None:
        return False, new_digest
    return new_digest == previous_digest.upper(), new_digest
