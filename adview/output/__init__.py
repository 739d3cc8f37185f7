"""Output formats for decoded tables."""

from .writers import CsvExporter, ListingWriter, TsvWriter, iter_rows

__all__ = ["CsvExporter", "ListingWriter", "TsvWriter", "iter_rows"]
