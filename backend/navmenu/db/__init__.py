"""Database Infrastructure - declarative Base and session factory.

Invariants:
    - All ORM models inherit from db.base.Base
"""
