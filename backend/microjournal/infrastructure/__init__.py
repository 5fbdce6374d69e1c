"""Infrastructure Layer — database access, store adapters and cross-cutting concerns.

Invariants:
    - Store adapters satisfy core.repository_protocols.JournalStore
    - All database failures leave this layer as StorageError

Design Decisions:
    - One adapter per backing engine; the Manager never knows which one it has
"""
