"""Catalog system for the fields of h5ad tables."""

from .catalog import ColumnCatalog, Member, probe_member
from .schema import CategoricalField, Encoding, Field

__all__ = [
    "ColumnCatalog",
    "Member",
    "probe_member",
    "CategoricalField",
    "Encoding",
    "Field",
]
