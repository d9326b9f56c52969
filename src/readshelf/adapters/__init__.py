"""Adapters (infrastructure) for readshelf.

Concrete persistence wiring: SQLAlchemy engines, table metadata, custom column
types and the Alembic migration environment.
"""
