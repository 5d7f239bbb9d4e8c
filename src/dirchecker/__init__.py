"""Dirchecker: concurrent directory integrity scanner."""

__version__ = "1.0.0"
