"""Menu Items Service - REST API for hierarchical navigation menu items.

Invariants:
    - Package root holds only the version (import side-effects prohibited)
"""

__version__ = "1.0.0"
