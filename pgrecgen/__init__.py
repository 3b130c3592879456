"""Generates typed Python record modules from PostgreSQL schemas."""

__version__ = "0.1.0"
