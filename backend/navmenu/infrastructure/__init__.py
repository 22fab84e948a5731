"""Infrastructure Layer - database engine and logging setup.

Invariants:
    - Infrastructure never imports from core/ domain logic beyond errors
"""
