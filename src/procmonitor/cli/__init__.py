"""
Command-line interface for the procmonitor package.
"""

from .main import main_cli

__all__ = [
    "main_cli",
]
