"""
Happy Thoughts API — Application Package
=========================================

What: Backend for the Happy Thoughts and Dogs APIs plus minimal user accounts.
Who:  Imported by uvicorn (`happythoughts.main:app`), Alembic, and pytest.

Layers:

    ┌─────────────────────────────────────┐
    │   Routes + Dependencies (HTTP)      │  ← envelopes, status codes, auth gate
    ├─────────────────────────────────────┤
    │   Services                          │  ← filters, CRUD, likes, accounts
    ├─────────────────────────────────────┤
    │   Models & Schemas                  │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │   Database                          │  ← async engine + per-request sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
