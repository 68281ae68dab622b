"""
Persistence.

- kv_store.py: slot stores (SQLite, in-memory)
- snapshot.py: BoardState <-> JSON slots, validation and reset
"""
