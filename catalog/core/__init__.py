"""
Core utilities shared across the catalog app.

This package hosts configuration helpers (env vars, paths, storage backend),
logging setup and the CSRF helpers used by HTML forms. Services and routers
depend on these primitives instead of reading os.environ directly.
"""
