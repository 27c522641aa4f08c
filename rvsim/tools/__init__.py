"""
External tools
"""

from ._utils import get_dependency
from . import summix


__all__ = ["get_dependency", "summix"]
