"""
Load Layer - Data Persistence

This layer handles the local append-only event store.
- One JSON file holding every saved record, in save order
- Load-merge-save on every write, never pruned
- No business logic, just I/O operations
"""
