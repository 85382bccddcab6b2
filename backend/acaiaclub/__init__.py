"""
Acaia Club Backend — Application Package Initializer
=====================================================

What: Marks the `acaiaclub` directory as a Python package.
Why:  Enables module imports like `from acaiaclub.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    Every resource endpoint follows the same four-step template:

    ┌─────────────────────────────────────┐
    │      Routes (Endpoint Handlers)     │  ← session check, HTTP verbs, status codes
    ├─────────────────────────────────────┤
    │     Schemas (Validation Layer)      │  ← pydantic request/response contracts
    ├─────────────────────────────────────┤
    │   Services (Persistence Gateway)    │  ← one CRUD operation per request
    ├─────────────────────────────────────┤
    │        Models & Database            │  ← SQLAlchemy ORM + async sessions
    └─────────────────────────────────────┘

    Errors raised at any layer travel up to the error mapper in
    error_handlers.py, which is the only place that picks a status code.
"""

__version__ = "1.0.0"
