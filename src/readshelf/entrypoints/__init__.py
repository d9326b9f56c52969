"""Entrypoints (inbound adapters) for readshelf.

Expose the application to the outside world. Currently this is the
``readshelf`` command-line interface: parse and validate inputs, call the
service layer, and present results.
"""
