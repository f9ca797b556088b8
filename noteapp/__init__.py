"""
Notes Backend — Application Package
====================================

A FastAPI + async SQLAlchemy backend for users, notes and blogs.

    ┌─────────────────────────────────────┐
    │     Routes (routes/, middleware/)   │  ← HTTP, auth, error translation
    ├─────────────────────────────────────┤
    │  Services (services/)               │  ← ownership rules, query building
    ├─────────────────────────────────────┤
    │  Models & Schemas                   │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │  Database (database.py)             │  ← injected async engine handle
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
