"""Exceptions raised while cataloging and decoding h5ad tables."""

from typing import Optional


class AdviewError(Exception):
    """Base class for all table reading errors."""

    pass


class GroupNotFoundError(AdviewError):
    """Raised when a group (or a field member of a group) cannot be opened."""

    def __init__(self, path: str, member: Optional[str] = None):
        self.path = path
        self.member = member
        if member is None:
            message = f"Group not found: '{path}'"
        else:
            message = f"Member '{member}' of group '{path}' is neither a dataset nor a group"
        super().__init__(message)


class AttributeMissingError(AdviewError):
    """Raised when a required attribute is absent from a node."""

    def __init__(self, node: str, key: str):
        self.node = node
        self.key = key
        super().__init__(f"Attribute '{key}' missing on '{node}'")


class AttributeTypeMismatchError(AdviewError):
    """Raised when an attribute cannot be read as text."""

    def __init__(self, node: str, key: str, actual: str):
        self.node = node
        self.key = key
        self.actual = actual
        super().__init__(
            f"Attribute '{key}' on '{node}' is not a string (found {actual})"
        )


class UnsupportedEncodingError(AdviewError):
    """Raised when a read is attempted against an unrecognized encoding."""

    def __init__(self, tag: str, field: str):
        self.tag = tag
        self.field = field
        super().__init__(f"Unsupported encoding-type '{tag}' for field '{field}'")


class OutOfRangeCategoryError(AdviewError):
    """Raised when a categorical code does not index into its categories."""

    def __init__(self, field: str, code: int, num_categories: int):
        self.field = field
        self.code = code
        self.num_categories = num_categories
        super().__init__(
            f"Code {code} out of range for field '{field}' "
            f"({num_categories} categories)"
        )


class ContainerReadError(AdviewError):
    """Raised when the underlying container fails to read."""

    pass
