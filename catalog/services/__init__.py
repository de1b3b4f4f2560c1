"""
High-level use cases for the catalog app.

Each service module orchestrates repositories/adapters to implement business
rules (create product, search, reset, login, share).

Routers (FastAPI endpoints) call these services instead of touching the
DocumentStore or the slot storage directly.
"""
