"""Route Modules — one file per audience (restaurant, admin) plus health.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
"""
