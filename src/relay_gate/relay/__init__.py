"""
relay_gate.relay

Boundary with the host relay framework.

Responsibilities:
- Typed views of the values the host hands to policies (events, filters, sessions).
- Composition of the policy chains the host invokes.
"""

# Package marker.
