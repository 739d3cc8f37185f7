"""Row projection and text/CSV rendering of decoded chunks."""

from typing import Any, Callable, Iterator, List

import pyarrow as pa
import pyarrow.csv as pa_csv

from ..reader.table_reader import ColumnChunk


def iter_rows(chunk: ColumnChunk) -> Iterator[List[str]]:
    """Transpose a chunk's columns into row-major records, stopping at the shortest."""
    for row in zip(*chunk.columns):
        yield list(row)


class TsvWriter:
    """Emits a header line and delimiter-joined rows."""

    def __init__(self, emit: Callable[[str], Any], delimiter: str = "\t"):
        self.emit = emit
        self.delimiter = delimiter

    def write_header(self, headers: List[str]) -> None:
        self.emit(self.delimiter.join(headers))

    def write_chunk(self, chunk: ColumnChunk) -> int:
        """Emit every row of a chunk.

        Returns:
            Number of rows written
        """
        written = 0
        for row in iter_rows(chunk):
            self.emit(self.delimiter.join(row))
            written += 1
        return written


class ListingWriter:
    """Emits one field as numbered lines ("<row number>: <value>")."""

    def __init__(self, emit: Callable[[str], Any]):
        self.emit = emit

    def write_chunk(self, chunk: ColumnChunk, name: str) -> int:
        values = chunk.column(name)
        for offset, value in enumerate(values):
            self.emit(f"{chunk.start + offset + 1}: {value}")
        return len(values)


class CsvExporter:
    """Writes chunks as CSV records with a single header row.

    Each chunk is rendered by pyarrow into an in-memory buffer and then
    written to the sink, so the sink is never closed by the exporter.

    Args:
        sink: Binary file-like object
        headers: Column names, in output order
    """

    def __init__(self, sink: Any, headers: List[str]):
        self.sink = sink
        self.schema = pa.schema([pa.field(name, pa.string()) for name in headers])
        self.rows_written = 0
        self._header_written = False

    def write_chunk(self, chunk: ColumnChunk) -> int:
        batch = chunk.to_arrow()
        self._write_batch(batch)
        self.rows_written += batch.num_rows
        return batch.num_rows

    def finish(self) -> None:
        """Emit the header if no chunk was written."""
        if not self._header_written:
            self._write_batch(self.schema.empty_table())

    def _write_batch(self, data: Any) -> None:
        options = pa_csv.WriteOptions(include_header=not self._header_written)
        buffer = pa.BufferOutputStream()
        pa_csv.write_csv(data, buffer, write_options=options)
        self.sink.write(buffer.getvalue().to_pybytes())
        self._header_written = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.finish()
        return False
