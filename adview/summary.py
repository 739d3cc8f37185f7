"""Shape and field summaries of h5ad tables."""

from typing import List, Tuple

from .catalog.catalog import ENCODING_ATTR, probe_member
from .container.base import Container
from .errors import ContainerReadError

INDEX_ATTR = "_index"


def table_shape(container: Container, group_path: str) -> int:
    """Number of rows in a table, taken from its index dataset.

    The group's `_index` attribute names the dataset holding row labels.

    Args:
        container: Open container
        group_path: Table group path

    Returns:
        Length of the index dataset
    """
    group = container.resolve_group(group_path)
    index_name = container.read_attribute(group, INDEX_ATTR)
    dataset = container.open_dataset(group, index_name)
    if dataset is None:
        raise ContainerReadError(
            f"Index dataset '{index_name}' not found in '{group_path}'"
        )
    return container.shape(dataset)[0]


def describe_fields(container: Container, group_path: str) -> List[Tuple[str, str]]:
    """List (name, encoding-type) for every member of a table group."""
    group = container.resolve_group(group_path)
    described = []
    for name in container.list_children(group):
        member = probe_member(container, group, group_path, name)
        described.append((name, container.read_attribute(member.handle, ENCODING_ATTR)))
    return described
