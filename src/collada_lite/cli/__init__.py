"""Command-line interface for collada-lite.

Provides the ``collada-lite`` console script with ``parse``, ``extract`` and
``tree`` commands.
"""

from .main import main

__all__ = ["main"]
