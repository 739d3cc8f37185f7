"""Field metadata classes."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class Encoding(Enum):
    """Column encodings understood by the decoder."""

    STRING_ARRAY = "string-array"
    CATEGORICAL = "categorical"
    INT_ARRAY = "array"
    UNKNOWN = "unknown"

    @classmethod
    def from_tag(cls, tag: str) -> "Encoding":
        """Map a raw encoding-type attribute to an Encoding.

        Unrecognized tags map to UNKNOWN; the raw tag stays on the Field.
        """
        for encoding in cls:
            if encoding is not cls.UNKNOWN and encoding.value == tag:
                return encoding
        return cls.UNKNOWN


@dataclass
class Field:
    """Column metadata."""

    name: str
    encoding: Encoding
    encoding_tag: str
    is_group: bool = False

    @property
    def is_supported(self) -> bool:
        return self.encoding is not Encoding.UNKNOWN

    def __repr__(self) -> str:
        return f"Field({self.name}, {self.encoding_tag})"


@dataclass
class CategoricalField(Field):
    """Dictionary-encoded column with its categories and codes in memory."""

    categories: List[str] = field(default_factory=list)
    codes: List[int] = field(default_factory=list)

    def __repr__(self) -> str:
        return (
            f"CategoricalField({self.name}, categories={len(self.categories)}, "
            f"codes={len(self.codes)})"
        )
