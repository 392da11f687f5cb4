"""
relay_gate.errors

Error taxonomy for the allowlist store and the policy engine.

Responsibilities:
- Distinguish storage outages, missing entries and invalid input.
- Give policies a distinct "could not decide" condition so they fail closed.
"""

from __future__ import annotations


class AllowlistError(Exception):
    pass


class ConnectivityError(AllowlistError):
    """Backing storage is unreachable or a query failed."""


class NotFoundError(AllowlistError):
    """A removal targeted an identity that is not on the allowlist."""

    def __init__(self, pubkey: str) -> None:
        self.pubkey = pubkey
        super().__init__(f"pubkey {pubkey} not found in allowed list")


class ValidationError(AllowlistError):
    """Malformed input, rejected before any storage access."""


class AuthorizationIndeterminate(Exception):
    """
    Raised when an authorization lookup could not complete.
    Never a grant: every caller must turn this into a reject.
    """


class ManagementDenied(Exception):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


# --- Module Notes -----------------------------------------------------------
# A negative authorization decision is not an exception; it is a `Decision` with
# reject=True (see `relay_gate.policies.decision`).
