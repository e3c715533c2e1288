# src/kukey_core/db/__init__.py
"""Database configuration and utilities."""

from .session import SessionLocal, get_db, run_in_transaction, unit_of_work

__all__ = ["get_db", "SessionLocal", "run_in_transaction", "unit_of_work"]
