"""
relay_gate.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide the allowlist ORM model, engine/session setup, and repositories.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The event store lives elsewhere; this package owns only the allowlist table.
