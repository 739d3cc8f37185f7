"""Container connectors."""

from .base import Container
from .hdf5 import H5Container

__all__ = [
    "Container",
    "H5Container",
]
