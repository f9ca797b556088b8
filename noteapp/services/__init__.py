# Services package init
"""
Notes Backend — Services Layer
===============================

What:  Business logic between routes (HTTP) and the database (persistence).
How:   Services take an AsyncSession plus domain inputs, apply filtering and
       ownership rules, and return ORM objects or raise NoteAppError subclasses.

Service Inventory:
    - query_builder: request parameters → SQLAlchemy filters and orderings
    - TokenService: bearer token issue/verify, password checks
    - UserService: registration, rename, self-deletion, login
    - NoteService: note CRUD with owner stamping
    - BlogService: blog CRUD and the per-author aggregate
"""
