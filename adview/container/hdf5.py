"""HDF5 container implementation backed by h5py."""

from typing import Any, List, Optional, Tuple
import logging

import h5py
import numpy as np

from .base import Container
from ..errors import (
    AttributeMissingError,
    AttributeTypeMismatchError,
    ContainerReadError,
)

logger = logging.getLogger(__name__)

INTEGER_KINDS = "iub"


class H5Container(Container):
    """Read-only view of an HDF5 (.h5ad) file."""

    def __init__(self, path: str):
        """Initialize HDF5 container.

        Args:
            path: Path to the .h5ad / .h5 file
        """
        super().__init__(path)
        self.file: Optional[h5py.File] = None

    def open(self) -> None:
        """Open the HDF5 file read-only."""
        logger.info(f"Opening HDF5 file '{self.path}'")
        self.file = h5py.File(self.path, "r")
        self._opened = True

    def close(self) -> None:
        """Close the HDF5 file."""
        if self.file is not None:
            self.file.close()
            logger.info(f"Closed HDF5 file '{self.path}'")
            self.file = None
        self._opened = False

    def root(self) -> h5py.Group:
        self._check_open()
        return self.file

    def list_children(self, group: h5py.Group) -> List[str]:
        self._check_open()
        return list(group.keys())

    def open_dataset(self, group: h5py.Group, name: str) -> Optional[h5py.Dataset]:
        self._check_open()
        node = group.get(name)
        if isinstance(node, h5py.Dataset):
            return node
        return None

    def open_group(self, group: h5py.Group, name: str) -> Optional[h5py.Group]:
        self._check_open()
        node = group.get(name)
        if isinstance(node, h5py.Group):
            return node
        return None

    def read_attribute(self, node: Any, key: str) -> str:
        self._check_open()
        if key not in node.attrs:
            raise AttributeMissingError(node.name, key)
        try:
            value = node.attrs[key]
            if isinstance(value, bytes):
                value = value.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise AttributeTypeMismatchError(node.name, key, "non-UTF-8 bytes") from exc
        if isinstance(value, str):
            return value
        raise AttributeTypeMismatchError(node.name, key, type(value).__name__)

    def shape(self, dataset: h5py.Dataset) -> Tuple[int, ...]:
        self._check_open()
        return tuple(dataset.shape)

    def read_strings(
        self,
        dataset: h5py.Dataset,
        start: Optional[int] = None,
        end: Optional[int] = None,
    ) -> List[str]:
        """Read a slice of a variable-length string dataset."""
        self._check_open()
        if _is_empty_range(start, end):
            return []
        try:
            values = dataset.asstr()[start:end]
        except (OSError, KeyError, TypeError, ValueError) as exc:
            raise ContainerReadError(
                f"Failed to read strings from '{dataset.name}': {exc}"
            ) from exc
        return np.asarray(values, dtype=object).tolist()

    def read_integers(
        self,
        dataset: h5py.Dataset,
        start: Optional[int] = None,
        end: Optional[int] = None,
    ) -> List[int]:
        """Read a slice of an integer (or boolean) dataset."""
        self._check_open()
        if dataset.dtype.kind not in INTEGER_KINDS:
            raise ContainerReadError(
                f"Dataset '{dataset.name}' has non-integer dtype {dataset.dtype}"
            )
        if _is_empty_range(start, end):
            return []
        try:
            values = dataset[start:end]
        except (OSError, KeyError, TypeError, ValueError) as exc:
            raise ContainerReadError(
                f"Failed to read integers from '{dataset.name}': {exc}"
            ) from exc
        return [int(value) for value in values.tolist()]

    def _check_open(self) -> None:
        if self.file is None:
            raise ContainerReadError(f"Container '{self.path}' is not open")


def _is_empty_range(start: Optional[int], end: Optional[int]) -> bool:
    return start is not None and end is not None and end <= start
