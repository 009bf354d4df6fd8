"""
auth/models.py -- Domain dataclasses for authentication results.

Pattern: Data class (pure data container, zero logic). Claims travel as the
plain dict decoded from the JWT so they can be returned verbatim; this module
only shapes the verifier's answer.

Layer rule: no imports from api/, web/, or core/.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class VerificationResult:
    """Outcome of verifying a credential token.

    On failure only valid=False is set -- claims and permissions stay None so
    callers cannot tell an expired token from a forged one.
    """

    valid: bool
    claims: dict[str, Any] | None = None
    permissions: list[str] | None = None
