"""Chunked, row-aligned reads across all fields of a table."""

from dataclasses import dataclass
from typing import Iterator, List, Optional
import logging

import pyarrow as pa

from ..catalog.catalog import ColumnCatalog
from ..catalog.schema import Field
from .decoder import ColumnDecoder

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 1000


@dataclass
class ColumnChunk:
    """Decoded values for one row range, one list per field."""

    headers: List[str]
    columns: List[List[str]]
    start: int

    @property
    def num_rows(self) -> int:
        """Rows present in every column; fields shorter than the table truncate it."""
        if not self.columns:
            return 0
        return min(len(values) for values in self.columns)

    def column(self, name: str) -> List[str]:
        """Get the decoded values of a field by name."""
        return self.columns[self.headers.index(name)]

    def to_arrow(self) -> pa.RecordBatch:
        """Convert to an Arrow record batch of string columns."""
        num_rows = self.num_rows
        arrays = [pa.array(values[:num_rows], type=pa.string()) for values in self.columns]
        schema = pa.schema([pa.field(name, pa.string()) for name in self.headers])
        return pa.RecordBatch.from_arrays(arrays, schema=schema)

    def __repr__(self) -> str:
        return (
            f"ColumnChunk(start={self.start}, rows={self.num_rows}, "
            f"cols={len(self.headers)})"
        )


class TableReader:
    """Serves whole-table or chunked reads of a cataloged table."""

    def __init__(
        self,
        catalog: ColumnCatalog,
        decoder: Optional[ColumnDecoder] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        """Initialize reader.

        Args:
            catalog: Catalog of the table to read
            decoder: Column decoder (default: a new ColumnDecoder)
            chunk_size: Rows per chunk when paging with iter_chunks
        """
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.catalog = catalog
        self.decoder = decoder or ColumnDecoder()
        self.chunk_size = chunk_size

    @property
    def row_count(self) -> int:
        return self.catalog.row_count

    def read_all_headers(self) -> List[str]:
        """Return field names in output column order."""
        return self.catalog.headers

    def read_chunk(
        self, start: int, count: int, names: Optional[List[str]] = None
    ) -> ColumnChunk:
        """Decode up to count rows of every field, starting at start.

        A start at or past the end of the table yields empty columns.

        Args:
            start: First row
            count: Maximum number of rows
            names: Restrict the read to these fields (default: all, in catalog order)

        Returns:
            Chunk with min(count, row_count - start) rows per field
        """
        if start < 0 or count < 0:
            raise ValueError(f"start and count must be non-negative ({start}, {count})")
        fields = self._select_fields(names)
        headers = [field.name for field in fields]
        if start >= self.row_count:
            return ColumnChunk(headers=headers, columns=[[] for _ in headers], start=start)

        end = min(start + count, self.row_count)
        logger.debug(f"Reading rows [{start}, {end}) of '{self.catalog.group_path}'")
        columns = []
        for field in fields:
            columns.append(self.decoder.read_range(self.catalog, field, start, end))
        return ColumnChunk(headers=headers, columns=columns, start=start)

    def read_whole_column_set(self) -> ColumnChunk:
        """Decode every row of every field."""
        return self.read_chunk(0, self.row_count)

    def iter_chunks(
        self,
        start: int = 0,
        limit: Optional[int] = None,
        names: Optional[List[str]] = None,
    ) -> Iterator[ColumnChunk]:
        """Page through the table sequentially in chunk_size pieces.

        Args:
            start: First row
            limit: Maximum number of rows overall (default: all remaining)
            names: Restrict the read to these fields (default: all)

        Yields:
            Non-empty chunks in row order
        """
        stop = self.row_count
        if limit is not None:
            stop = min(stop, start + limit)
        position = start
        while position < stop:
            count = min(self.chunk_size, stop - position)
            yield self.read_chunk(position, count, names)
            position += count

    def _select_fields(self, names: Optional[List[str]]) -> List[Field]:
        if names is None:
            return self.catalog.fields
        selected = []
        for name in names:
            field = self.catalog.get_field(name)
            if field is None:
                raise KeyError(f"Field '{name}' not found in '{self.catalog.group_path}'")
            selected.append(field)
        return selected

    def __repr__(self) -> str:
        return f"TableReader({self.catalog.group_path}, chunk_size={self.chunk_size})"
