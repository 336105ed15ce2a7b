"""Route Modules — one file per resource/concern.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Engine logic lives in services/; routes validate, authorize and delegate

Design Decisions:
    - Explicit registration in main.py over auto-discovery
"""
