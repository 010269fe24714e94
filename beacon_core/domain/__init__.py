"""
Domain Module: Business logic.

- Consolidation: validate the three-beacon data set, solve position and
  reconstruct the message
"""

from .consolidation import ConsolidationService

__all__ = [
    'ConsolidationService',
]
