"""Command-line interface for readshelf."""
