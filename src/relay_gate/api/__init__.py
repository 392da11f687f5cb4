"""
relay_gate.api

HTTP surface (FastAPI).

Responsibilities:
- Health/readiness probes for operational tooling.
- NIP-86 style management endpoint in front of the management policy.
"""

# Package marker.
