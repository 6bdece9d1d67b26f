from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from camel_converter.pydantic_base import CamelBase
from pydantic import BaseModel, ConfigDict, Field, field_validator

from solrdrv.errors import SolrUsageError
from solrdrv.types import JsonDict


class SolrFieldType(str, Enum):
    """Field types shipped with Solr's default configset."""

    BOOLEAN = "boolean"
    DATE = "pdate"
    DELIMITED_PAYLOADS_STRING = "delimited_payloads_string"
    DOUBLE = "pdouble"
    FLOAT = "pfloat"
    INT = "pint"
    LONG = "plong"
    LOWERCASE = "lowercase"
    STRING = "string"
    STRINGS = "strings"
    TEXT_GENERAL = "text_general"


class FieldDescriptor(CamelBase):
    """One field of a collection schema.

    Instances are immutable, use `override` to get a changed copy. Optional properties left as
    None are not sent so Solr falls back to the field type's defaults.

    https://solr.apache.org/guide/solr/latest/indexing-guide/fields.html
    """

    model_config = ConfigDict(frozen=True)

    name: str
    solr_type: str = Field(..., alias="type")
    indexed: bool = True
    stored: bool = True
    multi_valued: bool = False
    default: Any | None = None
    doc_values: bool | None = None
    sort_missing_first: bool | None = None
    sort_missing_last: bool | None = None
    uninvertible: bool | None = None
    omit_norms: bool | None = None
    omit_term_freq_and_positions: bool | None = None
    omit_positions: bool | None = None
    term_vectors: bool | None = None
    term_positions: bool | None = None
    term_offsets: bool | None = None
    term_payloads: bool | None = None
    required: bool | None = None
    use_doc_values_as_stored: bool | None = None
    large: bool | None = None

    @field_validator("name", "solr_type", mode="before")
    @classmethod
    def validate_not_empty(cls, v: Any) -> Any:
        if isinstance(v, SolrFieldType):
            return v.value

        if not v:
            raise SolrUsageError("Field name and type cannot be empty")

        return v

    def override(self, **changes: Any) -> FieldDescriptor:
        """Returns a copy of the descriptor with the given properties changed.

        Examples:
            >>> from solrdrv import FieldBuilder
            >>> age = FieldBuilder.long("age").override(stored=False, doc_values=True)
        """
        unknown = set(changes) - set(type(self).model_fields)
        if unknown:
            raise SolrUsageError(f"Unknown field properties: {', '.join(sorted(unknown))}")

        return type(self).model_validate({**self.model_dump(), **changes})

    def to_payload(self) -> JsonDict:
        return self.model_dump(by_alias=True, exclude_none=True)


SchemaAction = Literal[
    "add-field", "replace-field", "delete-field", "add-copy-field", "delete-copy-field"
]


class SchemaOperation(BaseModel):
    model_config = ConfigDict(frozen=True)

    action: SchemaAction
    payload: JsonDict

    def to_command(self) -> JsonDict:
        return {self.action: self.payload}
