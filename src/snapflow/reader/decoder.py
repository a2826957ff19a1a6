"""Decoding of raw snapshot rows into entities."""

from typing import Any, Dict, Mapping

from pydantic import ValidationError

from snapflow.common.exceptions import malformed_row_error
from snapflow.entities.kinds import EntityKind
from snapflow.entities.models import Entity
from snapflow.tags import TagParser, parse_tags


class EntityDecoder:
    """Turns one raw row into an entity of a given kind.

    Columns are read by name. The raw tag column is handed to the tag
    parser untouched, so the tag encoding can change without affecting
    decoding or ordering.

    Attributes:
        kind: Entity kind rows are decoded into
        tag_parser: Pure function from raw tag text to a tag mapping
    """

    def __init__(self, kind: EntityKind, tag_parser: TagParser = parse_tags):
        self.kind = kind
        self.tag_parser = tag_parser

    def _column(self, row: Mapping[str, Any], column: str, required: bool = True) -> Any:
        try:
            value = row[column]
        except KeyError as e:
            raise malformed_row_error(self.kind.name, column, e)
        if value is None and required:
            raise malformed_row_error(self.kind.name, column)
        return value

    def decode(self, row: Mapping[str, Any]) -> Entity:
        """Build an entity from ``row``.

        Args:
            row: Row mapping with ``id``, ``timestamp``, ``tags`` and the
                kind's attribute columns

        Returns:
            Entity of the kind's model class

        Raises:
            MalformedRowError: If a column is missing, null where a value is
                required, or of the wrong type
        """
        fields: Dict[str, Any] = {
            "id": self._column(row, "id"),
            "timestamp": self._column(row, "timestamp"),
        }
        for column, field_name in self.kind.attribute_columns.items():
            fields[field_name] = self._column(row, column)

        fields["tags"] = self.tag_parser(self._column(row, "tags", required=False))

        try:
            return self.kind.model(**fields)
        except ValidationError as e:
            errors = e.errors()
            column = None
            if errors and errors[0].get("loc"):
                field_name = str(errors[0]["loc"][0])
                column = next(
                    (col for col, name in self.kind.attribute_columns.items() if name == field_name),
                    field_name,
                )
            raise malformed_row_error(self.kind.name, column, e)

    __call__ = decode
