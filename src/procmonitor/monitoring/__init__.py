"""
Collection cycle coordination.
"""

from .cycle import CollectionCycle

__all__ = ["CollectionCycle"]
