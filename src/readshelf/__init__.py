"""readshelf

A self-hosted read-it-later application. This package ships the command-line
tooling used to install and administer an instance: requirement checks,
database provisioning and migrations, fixtures, and administrator setup.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
