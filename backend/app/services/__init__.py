"""Services Layer — registration, lifecycle, reporting, dashboard and user directory.

Invariants:
    - Services work against a TrainingStores bundle, never a concrete backend
    - Every mutation ends with stores.commit(); reads never commit

Design Decisions:
    - One class per concern, built per request by api/dependencies.py
"""
