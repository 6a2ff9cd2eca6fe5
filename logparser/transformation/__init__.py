"""
Transformation Layer - Pure, Deterministic Functions

Filtering and display formatting over loaded records.
- Pure functions (input → output)
- No I/O operations, never touches the store
- Unit testable
"""
