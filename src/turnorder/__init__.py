"""Deterministic battle turn-order scheduling for tabletop sessions."""

__version__ = "0.3.0"
