"""
Transformation Layer Schemas

Flat tabular view of event records used for filtering.
"""

import polars as pl

EVENTS_SCHEMA = pl.Schema(
    [
        ("id", pl.String()),
        ("type", pl.String()),
        ("actor_login", pl.String()),
    ]
)

ROW_INDEX = "row_nr"
