"""Service layer for readshelf.

Application use-cases behind the CLI: requirement checks, user management,
internal settings, fixtures and cache maintenance. Each use-case works on a
SQLAlchemy ``Engine`` handed in by the caller.
"""
