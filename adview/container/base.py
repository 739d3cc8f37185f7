"""Base container interface."""

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Tuple

from ..errors import GroupNotFoundError


class Container(ABC):
    """Abstract base class for hierarchical containers of groups and datasets.

    Group and dataset handles are opaque to callers; they are only ever
    passed back into the container that produced them.
    """

    def __init__(self, path: str):
        """Initialize container.

        Args:
            path: Location of the container (file path for on-disk stores)
        """
        self.path = path
        self._opened = False

    @abstractmethod
    def open(self) -> None:
        """Open the underlying store."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Release the underlying store."""
        pass

    @abstractmethod
    def root(self) -> Any:
        """Return the root group handle."""
        pass

    @abstractmethod
    def list_children(self, group: Any) -> List[str]:
        """List immediate child names of a group.

        Args:
            group: Group handle

        Returns:
            Child names, in the order the store reports them
        """
        pass

    @abstractmethod
    def open_dataset(self, group: Any, name: str) -> Optional[Any]:
        """Open a child dataset.

        Args:
            group: Parent group handle
            name: Child name

        Returns:
            Dataset handle, or None if the child is not a dataset
        """
        pass

    @abstractmethod
    def open_group(self, group: Any, name: str) -> Optional[Any]:
        """Open a child group.

        Args:
            group: Parent group handle
            name: Child name

        Returns:
            Group handle, or None if the child is not a group
        """
        pass

    @abstractmethod
    def read_attribute(self, node: Any, key: str) -> str:
        """Read a text attribute.

        Args:
            node: Group or dataset handle
            key: Attribute name

        Returns:
            Attribute value as text

        Raises:
            AttributeMissingError: If the attribute does not exist
            AttributeTypeMismatchError: If the attribute is not text
        """
        pass

    @abstractmethod
    def shape(self, dataset: Any) -> Tuple[int, ...]:
        """Return the shape of a dataset."""
        pass

    @abstractmethod
    def read_strings(
        self, dataset: Any, start: Optional[int] = None, end: Optional[int] = None
    ) -> List[str]:
        """Read a run of variable-length strings.

        Args:
            dataset: Dataset handle
            start: First element (default: beginning)
            end: One past the last element (default: end of dataset)

        Returns:
            Decoded strings
        """
        pass

    @abstractmethod
    def read_integers(
        self, dataset: Any, start: Optional[int] = None, end: Optional[int] = None
    ) -> List[int]:
        """Read a run of integer elements.

        Args:
            dataset: Dataset handle
            start: First element (default: beginning)
            end: One past the last element (default: end of dataset)

        Returns:
            Python integers
        """
        pass

    def resolve_group(self, path: str) -> Any:
        """Open a group by slash-separated path from the root.

        Args:
            path: Group path such as "obs" or "uns/neighbors"

        Returns:
            Group handle

        Raises:
            GroupNotFoundError: If any path component is not a group
        """
        group = self.root()
        for part in path.strip("/").split("/"):
            if not part:
                continue
            group = self.open_group(group, part)
            if group is None:
                raise GroupNotFoundError(path)
        return group

    def is_open(self) -> bool:
        """Check if the container is open.

        Returns:
            True if open, False otherwise
        """
        return self._opened

    def __enter__(self):
        """Context manager entry."""
        if not self.is_open():
            self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(path={self.path})"
