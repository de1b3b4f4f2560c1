"""
Persistence adapters.

Slot storages expose a localStorage-like API (one string value per key) on
top of a SQL table or a JSON file. The DocumentStore sits on one fixed key
and is the only thing services talk to.
"""
