"""
Users API - Application Package Initializer
============================================

What: Marks the `users_api` directory as a Python package.
Who:  Imported by uvicorn (`users_api.main:app`), pytest, and `python -m users_api`.

Architecture Note:
    The service follows a layered layout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │      Services (UserStore core)      │  ← Validation, locking, id allocation
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← Frozen dataclasses + Pydantic
    └─────────────────────────────────────┘

    Routes translate HTTP into store calls and back. The store never sees a
    request object and never produces a status code.
"""

__version__ = "1.0.0"
