"""Infrastructure Layer — storage backends, clock, credentials and cross-cutting concerns.

Invariants:
    - Infrastructure implements core protocols; it never imports core rule modules
      (registration, lifecycle, reports, dashboard)
    - All storage failures mapped to typed errors (DatabaseError, StoreError)

Design Decisions:
    - Two interchangeable Entity Store backends (SQL, JSON file) behind one Protocol
"""
