"""
Hookflow Configuration Package.

Provides Pydantic Settings loaded from environment variables.
"""

from hookflow_config.settings import Settings

__all__ = ["Settings"]
