"""Concatenate scenario results into one tagged table and persist it."""

from .collation import (
    CollationOutcome,
    DEFAULT_TAG_FIELD,
    collate,
    collate_and_persist,
    write_collated,
)

__all__ = [
    "CollationOutcome",
    "DEFAULT_TAG_FIELD",
    "collate",
    "collate_and_persist",
    "write_collated",
]
