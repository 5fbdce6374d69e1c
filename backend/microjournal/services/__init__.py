"""Services Layer — business rules orchestrating core logic and store adapters.

Invariants:
    - Services depend on core protocols, never on a concrete store

Design Decisions:
    - Pure rules live in core/ (enforce_entry, pagination); services sequence them around IO
"""
