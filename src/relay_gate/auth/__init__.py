"""
relay_gate.auth

Caller identification for the HTTP management surface.

Responsibilities:
- Issue and validate bearer tokens whose subject is a Nostr pubkey.
- Turn request credentials into an `AuthSession` for the policies.
"""

# Package marker.
