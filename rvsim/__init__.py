from ._logging import logger
from . import data, ancestry, tools, io, utils
from .version import __version__

__all__ = [
    "data",
    "ancestry",
    "tools",
    "io",
    "utils",
]
