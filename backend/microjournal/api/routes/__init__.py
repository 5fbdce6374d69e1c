"""Route Modules — journal_service (the four RPCs) and health (probes).

Invariants:
    - Each module owns one APIRouter with its prefix and tags
    - Routes translate wire <-> domain and delegate; journal rules live in services/ and core/

Design Decisions:
    - Routers included explicitly in main.py, no auto-discovery
"""
