"""
Developer Registry — Application Package
==========================================

Layered FastAPI service for levels (niveis) and developers (desenvolvedores):

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │  Services (rules, derived fields,   │  ← integrity checks, age,
    │            sort/filter engine)      │    enrichment, ordering
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
