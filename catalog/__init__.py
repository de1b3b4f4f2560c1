"""Product catalog manager (FastAPI + single durable key/value slot)."""
