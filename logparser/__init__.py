"""
logparser - fetch paginated event records from a remote API, keep them in a
local append-only JSON store and display filtered views of them.
"""

__version__ = "1.0.0"
