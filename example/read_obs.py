"""Example: page through the obs table of an h5ad file with the reader API."""

import sys

from adview.catalog import ColumnCatalog
from adview.container import H5Container
from adview.output import iter_rows
from adview.reader import TableReader


def main(path: str) -> None:
    with H5Container(path) as container:
        catalog = ColumnCatalog.build(container, "obs")
        print(f"{catalog!r}")
        for field in catalog:
            print(f"  {field.name}: {field.encoding_tag}")

        reader = TableReader(catalog, chunk_size=500)
        for chunk in reader.iter_chunks(limit=1500):
            first = next(iter_rows(chunk))
            print(f"rows {chunk.start}-{chunk.start + chunk.num_rows - 1}: first row {first}")


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else "data/sample.h5ad")
