"""
Digital Life Lessons API — Application Package
================================================

Architecture Note:
    This backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Queries, counter upkeep
    ├─────────────────────────────────────┤
    │     Schemas & Document Helpers      │  ← Pydantic bodies, Mongo dicts
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Shared Motor client
    └─────────────────────────────────────┘

    Services take the database handle as an argument, so each layer can be
    tested without the one below it.
"""

__version__ = "1.0.0"
