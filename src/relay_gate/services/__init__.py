"""
relay_gate.services

Service layer (transaction + error translation owners).

Responsibilities:
- Wrap repositories into operations that are atomic on their own.
"""

# Package marker.
