"""Decoding of row ranges from encoded columns."""

from typing import List
import logging

from ..catalog.catalog import ColumnCatalog
from ..catalog.schema import CategoricalField, Encoding, Field
from ..errors import ContainerReadError, OutOfRangeCategoryError, UnsupportedEncodingError

logger = logging.getLogger(__name__)


class ColumnDecoder:
    """Turns a field's stored values over a row range into text."""

    def read_range(
        self, catalog: ColumnCatalog, field: Field, start: int, end: int
    ) -> List[str]:
        """Decode rows [start, end) of a field.

        String and integer columns are read from the container on every
        call. Categorical columns only touch the catalog's in-memory codes.

        Args:
            catalog: Catalog the field belongs to
            field: Field to decode
            start: First row
            end: One past the last row

        Returns:
            One string per row

        Raises:
            ValueError: If the range is outside [0, row_count]
            UnsupportedEncodingError: If the field's encoding is not recognized
            OutOfRangeCategoryError: If a categorical code has no category
            ContainerReadError: If the container read fails
        """
        if not 0 <= start <= end <= catalog.row_count:
            raise ValueError(
                f"Invalid row range [{start}, {end}) for {catalog.row_count} rows"
            )

        if field.encoding is Encoding.STRING_ARRAY:
            dataset = self._open_dataset(catalog, field)
            return catalog.container.read_strings(dataset, start, end)
        if field.encoding is Encoding.CATEGORICAL:
            return self._decode_categorical(field, start, end)
        if field.encoding is Encoding.INT_ARRAY:
            dataset = self._open_dataset(catalog, field)
            values = catalog.container.read_integers(dataset, start, end)
            return [str(value) for value in values]
        raise UnsupportedEncodingError(field.encoding_tag, field.name)

    def _decode_categorical(self, field: Field, start: int, end: int) -> List[str]:
        if not isinstance(field, CategoricalField):
            raise ContainerReadError(
                f"Categorical data not loaded for field '{field.name}'"
            )
        categories = field.categories
        values: List[str] = []
        for code in field.codes[start:end]:
            if code < 0 or code >= len(categories):
                raise OutOfRangeCategoryError(field.name, code, len(categories))
            values.append(categories[code])
        return values

    def _open_dataset(self, catalog: ColumnCatalog, field: Field):
        dataset = catalog.container.open_dataset(catalog.group, field.name)
        if dataset is None:
            raise ContainerReadError(
                f"Field '{field.name}' in '{catalog.group_path}' is not a dataset"
            )
        return dataset

    def __repr__(self) -> str:
        return "ColumnDecoder()"
