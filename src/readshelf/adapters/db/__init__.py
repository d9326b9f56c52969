"""Database adapters: engines, dialect helpers, schema and migrations."""
