"""Catalog of the fields stored in one table-like group."""

from dataclasses import dataclass
from typing import Any, Iterator, List, Optional
import logging

from ..container.base import Container
from ..errors import ContainerReadError, GroupNotFoundError
from .schema import CategoricalField, Encoding, Field

logger = logging.getLogger(__name__)

ENCODING_ATTR = "encoding-type"
CODES = "codes"
CATEGORIES = "categories"


@dataclass
class Member:
    """Result of probing a group member: a dataset or a sub-group."""

    name: str
    handle: Any
    is_group: bool


def probe_member(container: Container, group: Any, group_path: str, name: str) -> Member:
    """Open a group member as a dataset, falling back to a sub-group.

    Args:
        container: Container holding the group
        group: Parent group handle
        group_path: Parent group path, used in error messages
        name: Member name

    Returns:
        Member describing what was found

    Raises:
        GroupNotFoundError: If the member is neither a dataset nor a group
    """
    dataset = container.open_dataset(group, name)
    if dataset is not None:
        return Member(name=name, handle=dataset, is_group=False)
    sub_group = container.open_group(group, name)
    if sub_group is not None:
        return Member(name=name, handle=sub_group, is_group=True)
    raise GroupNotFoundError(group_path, name)


class ColumnCatalog:
    """Field metadata for one table, built once per table open.

    String and integer columns stay in the container and are re-read per
    request; categorical categories and codes are loaded up front.
    """

    def __init__(
        self,
        container: Container,
        group_path: str,
        group: Any,
        fields: List[Field],
        row_count: int,
    ):
        """Initialize catalog. Use ColumnCatalog.build to read one from a container.

        Args:
            container: Container the table lives in
            group_path: Path of the table group
            group: Group handle
            fields: Fields in listing order
            row_count: Number of rows shared by all fields
        """
        self.container = container
        self.group_path = group_path
        self.group = group
        self._fields = list(fields)
        self.row_count = row_count

    @classmethod
    def build(cls, container: Container, group_path: str) -> "ColumnCatalog":
        """Inspect a group and catalog its fields.

        Args:
            container: Open container
            group_path: Path of the table group ("obs", "var", ...)

        Returns:
            Catalog with fields in the group's listing order

        Raises:
            GroupNotFoundError: If the group or a member cannot be opened
            AttributeMissingError: If a member has no encoding-type
            AttributeTypeMismatchError: If encoding-type is not text
            ContainerReadError: If categorical buffers cannot be read
        """
        group = container.resolve_group(group_path)
        names = container.list_children(group)

        fields: List[Field] = []
        row_count = 0
        for index, name in enumerate(names):
            member = probe_member(container, group, group_path, name)
            tag = container.read_attribute(member.handle, ENCODING_ATTR)
            if index == 0:
                row_count = cls._member_length(container, member, group_path)
            fields.append(cls._build_field(container, member, tag, group_path))

        logger.debug(
            f"Cataloged '{group_path}': {len(fields)} fields, {row_count} rows"
        )
        return cls(container, group_path, group, fields, row_count)

    @staticmethod
    def _member_length(container: Container, member: Member, group_path: str) -> int:
        """Row count of a member: its own length, or its codes' length."""
        dataset = member.handle
        if member.is_group:
            dataset = container.open_dataset(member.handle, CODES)
            if dataset is None:
                raise ContainerReadError(
                    f"Field '{member.name}' in '{group_path}' has no '{CODES}' dataset"
                )
        shape = container.shape(dataset)
        if not shape:
            raise ContainerReadError(
                f"Field '{member.name}' in '{group_path}' is a scalar, not a column"
            )
        return shape[0]

    @staticmethod
    def _build_field(
        container: Container, member: Member, tag: str, group_path: str
    ) -> Field:
        encoding = Encoding.from_tag(tag)
        if encoding is not Encoding.CATEGORICAL:
            if encoding is Encoding.UNKNOWN:
                logger.debug(f"Field '{member.name}' has unrecognized encoding '{tag}'")
            return Field(
                name=member.name,
                encoding=encoding,
                encoding_tag=tag,
                is_group=member.is_group,
            )

        if not member.is_group:
            raise GroupNotFoundError(f"{group_path}/{member.name}")
        categories_ds = container.open_dataset(member.handle, CATEGORIES)
        codes_ds = container.open_dataset(member.handle, CODES)
        if categories_ds is None or codes_ds is None:
            raise ContainerReadError(
                f"Categorical field '{member.name}' in '{group_path}' "
                f"requires '{CATEGORIES}' and '{CODES}' datasets"
            )
        return CategoricalField(
            name=member.name,
            encoding=encoding,
            encoding_tag=tag,
            is_group=True,
            categories=container.read_strings(categories_ds),
            codes=container.read_integers(codes_ds),
        )

    @property
    def fields(self) -> List[Field]:
        return list(self._fields)

    @property
    def headers(self) -> List[str]:
        """Field names in column order."""
        return [f.name for f in self._fields]

    def get_field(self, name: str) -> Optional[Field]:
        """Get field by name.

        Args:
            name: Field name (case-sensitive)

        Returns:
            Field if found, None otherwise
        """
        for f in self._fields:
            if f.name == name:
                return f
        return None

    def __iter__(self) -> Iterator[Field]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return (
            f"ColumnCatalog({self.group_path}, fields={len(self._fields)}, "
            f"rows={self.row_count})"
        )
