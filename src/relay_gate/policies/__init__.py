"""
relay_gate.policies

Authorization policy engine.

Responsibilities:
- Decide, per event, filter and management call, whether the caller may proceed.
- Layer owner bypass, allowlist membership and session state into one decision.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Every policy fails closed: a storage outage is a reject, never a grant.
