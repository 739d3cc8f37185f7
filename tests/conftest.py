"""Fixtures that build small h5ad files in the AnnData on-disk layout."""

from typing import Dict, List, Optional, Sequence
import logging

import h5py
import numpy as np
import pytest

from adview.container import H5Container


def add_strings(group: h5py.Group, name: str, values: Sequence[str], tag: str = "string-array"):
    dataset = group.create_dataset(
        name, data=np.array(values, dtype=object), dtype=h5py.string_dtype()
    )
    dataset.attrs["encoding-type"] = tag
    dataset.attrs["encoding-version"] = "0.2.0"
    return dataset


def add_integers(group: h5py.Group, name: str, values: Sequence[int], dtype: str = "int64"):
    dataset = group.create_dataset(name, data=np.array(values, dtype=dtype))
    dataset.attrs["encoding-type"] = "array"
    dataset.attrs["encoding-version"] = "0.2.0"
    return dataset


def add_categorical(
    group: h5py.Group,
    name: str,
    categories: Sequence[str],
    codes: Sequence[int],
    dtype: str = "int8",
):
    sub_group = group.create_group(name)
    sub_group.attrs["encoding-type"] = "categorical"
    sub_group.attrs["encoding-version"] = "0.2.0"
    sub_group.attrs["ordered"] = False
    sub_group.create_dataset(
        "categories", data=np.array(categories, dtype=object), dtype=h5py.string_dtype()
    )
    sub_group.create_dataset("codes", data=np.array(codes, dtype=dtype))
    return sub_group


def add_table(root: h5py.Group, path: str, index: str, track_order: bool = True) -> h5py.Group:
    group = root.create_group(path, track_order=track_order)
    group.attrs["encoding-type"] = "dataframe"
    group.attrs["_index"] = index
    return group


CELLS = ["AAACCCAAGCGCCCAT-1", "AAACCCACAGAGTCAG-1", "AAACCCAGTATGCTAC-1", "AAACGAAAGCCAGAGT-1", "AAACGAACAATGTTGC-1"]
CELL_TYPES = ["B cell", "T cell", "NK cell"]
CELL_TYPE_CODES = [1, 0, 1, 2, 1]
N_GENES = [1021, 877, 2045, 1533, 980]
GENES = ["MIR1302-2HG", "FAM138A", "OR4F5"]
GENE_IDS = ["ENSG00000243485", "ENSG00000237613", "ENSG00000186092"]
N_CELLS = [0, 12, 3]


@pytest.fixture
def h5ad_path(tmp_path):
    """A five-cell, three-gene h5ad file.

    obs columns, in creation order: cell_id, n_genes, cell_type.
    var columns, in creation order: gene_name, gene_ids, n_cells.
    """
    path = tmp_path / "pbmc.h5ad"
    with h5py.File(path, "w") as f:
        f.attrs["encoding-type"] = "anndata"
        obs = add_table(f, "obs", "cell_id")
        add_strings(obs, "cell_id", CELLS)
        add_integers(obs, "n_genes", N_GENES)
        add_categorical(obs, "cell_type", CELL_TYPES, CELL_TYPE_CODES)

        var = add_table(f, "var", "gene_name")
        add_strings(var, "gene_name", GENES)
        add_strings(var, "gene_ids", GENE_IDS)
        add_integers(var, "n_cells", N_CELLS, dtype="uint32")
    return str(path)


@pytest.fixture
def make_h5ad(tmp_path):
    """Factory writing an h5ad file with a single obs table.

    Each column spec is (name, kind, payload) where kind is "strings",
    "integers", "categorical" (payload = (categories, codes)), or
    "raw" (payload = (tag, values), a string dataset with an arbitrary tag).
    """
    counter = {"n": 0}

    def _make(columns: List[tuple], index: Optional[str] = None, track_order: bool = True) -> str:
        counter["n"] += 1
        path = tmp_path / f"custom_{counter['n']}.h5ad"
        with h5py.File(path, "w") as f:
            obs = add_table(f, "obs", index or (columns[0][0] if columns else "index"), track_order)
            for name, kind, payload in columns:
                if kind == "strings":
                    add_strings(obs, name, payload)
                elif kind == "integers":
                    add_integers(obs, name, payload)
                elif kind == "categorical":
                    categories, codes = payload
                    add_categorical(obs, name, categories, codes)
                elif kind == "raw":
                    tag, values = payload
                    add_strings(obs, name, values, tag=tag)
                else:
                    raise ValueError(f"unknown column kind {kind}")
        return str(path)

    return _make


@pytest.fixture
def container(h5ad_path):
    """Open container over the standard fixture file."""
    with H5Container(h5ad_path) as opened:
        yield opened


def open_container(path: str) -> H5Container:
    container = H5Container(path)
    container.open()
    return container


@pytest.fixture
def opener():
    """Opens containers and closes them after the test."""
    opened: Dict[str, H5Container] = {}

    def _open(path: str) -> H5Container:
        container = open_container(path)
        opened[f"{path}:{len(opened)}"] = container
        return container

    yield _open
    for container in opened.values():
        container.close()


@pytest.fixture
def restore_root_logger():
    """Put the root and h5py loggers back the way the test found them."""
    root = logging.getLogger()
    h5py_logger = logging.getLogger("h5py")
    handlers = root.handlers[:]
    level = root.level
    h5py_level = h5py_logger.level
    yield root
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
    h5py_logger.setLevel(h5py_level)
