"""Alembic migration environment and revision scripts for readshelf."""
