"""Column decoding and table reads."""

from .decoder import ColumnDecoder
from .table_reader import ColumnChunk, TableReader

__all__ = ["ColumnDecoder", "ColumnChunk", "TableReader"]
