"""Service Layer - storage-backed collaborators and the menu items controller.

Invariants:
    - Every collaborator satisfies a Protocol from core.repository_protocols
    - Services own all awaits; core functions are called with fetched data
"""
