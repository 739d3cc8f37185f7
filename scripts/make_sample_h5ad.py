#!/usr/bin/env python3
"""Write a small h5ad file with sample obs/var tables for trying out adview."""

import sys
from pathlib import Path

import h5py
import numpy as np

STRING_DTYPE = h5py.string_dtype()


def _tag(node, encoding_type: str) -> None:
    node.attrs["encoding-type"] = encoding_type
    node.attrs["encoding-version"] = "0.2.0"


def _strings(group, name, values) -> None:
    dataset = group.create_dataset(name, data=np.array(values, dtype=object), dtype=STRING_DTYPE)
    _tag(dataset, "string-array")


def _categorical(group, name, categories, codes) -> None:
    sub_group = group.create_group(name)
    _tag(sub_group, "categorical")
    sub_group.attrs["ordered"] = False
    sub_group.create_dataset("categories", data=np.array(categories, dtype=object), dtype=STRING_DTYPE)
    sub_group.create_dataset("codes", data=np.array(codes, dtype="int8"))


def make_sample_h5ad(path: str = "data/sample.h5ad", n_obs: int = 2500, n_var: int = 40):
    """Create an h5ad file with string, integer and categorical columns.

    Args:
        path: Output file path
        n_obs: Number of cells (obs rows)
        n_var: Number of genes (var rows)
    """
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    rng = np.random.default_rng(0)

    print(f"Writing sample h5ad to {path}...")

    with h5py.File(out, "w") as f:
        _tag(f, "anndata")

        obs = f.create_group("obs", track_order=True)
        _tag(obs, "dataframe")
        obs.attrs["_index"] = "cell_id"
        _strings(obs, "cell_id", [f"CELL{i:06d}-1" for i in range(n_obs)])
        n_genes = obs.create_dataset("n_genes", data=rng.integers(200, 5000, n_obs))
        _tag(n_genes, "array")
        _categorical(
            obs,
            "cell_type",
            ["B cell", "T cell", "NK cell", "Monocyte"],
            rng.integers(0, 4, n_obs),
        )
        _categorical(obs, "batch", ["batch1", "batch2"], rng.integers(0, 2, n_obs))

        var = f.create_group("var", track_order=True)
        _tag(var, "dataframe")
        var.attrs["_index"] = "gene_name"
        _strings(var, "gene_name", [f"GENE{i}" for i in range(n_var)])
        _strings(var, "gene_ids", [f"ENSG{i:011d}" for i in range(n_var)])
        n_cells = var.create_dataset("n_cells", data=rng.integers(0, n_obs, n_var).astype("uint32"))
        _tag(n_cells, "array")

    print(f"✓ Created {n_obs} obs rows and {n_var} var rows")


if __name__ == "__main__":
    make_sample_h5ad(*sys.argv[1:2])
