from __future__ import annotations

from typing import Any

from solrdrv.models.field import FieldDescriptor, SolrFieldType


class FieldBuilder:
    """Factories for the schema fields used most often.

    Each factory fixes the Solr type, leaves the field indexed, stored and single valued, and
    accepts keyword overrides for any other `FieldDescriptor` property.

    Examples:
        >>> from solrdrv import FieldBuilder
        >>> FieldBuilder.string("name")
        >>> FieldBuilder.date("birthday", required=True)
    """

    @staticmethod
    def custom(name: str, solr_type: str | SolrFieldType, **overrides: Any) -> FieldDescriptor:
        return FieldDescriptor(name=name, solr_type=solr_type, **overrides)

    @staticmethod
    def string(name: str, **overrides: Any) -> FieldDescriptor:
        return FieldBuilder.custom(
            name, SolrFieldType.STRING, **{"omit_norms": True, **overrides}
        )

    @staticmethod
    def multi_string(name: str, **overrides: Any) -> FieldDescriptor:
        return FieldBuilder.custom(
            name,
            SolrFieldType.STRINGS,
            **{"omit_norms": True, "multi_valued": True, **overrides},
        )

    @staticmethod
    def text(name: str, **overrides: Any) -> FieldDescriptor:
        """A lowercased, untokenized text field."""
        return FieldBuilder.custom(name, SolrFieldType.LOWERCASE, **overrides)

    @staticmethod
    def fulltext(name: str, **overrides: Any) -> FieldDescriptor:
        """A tokenized text field for full text search."""
        return FieldBuilder.custom(name, SolrFieldType.TEXT_GENERAL, **overrides)

    @staticmethod
    def numeric(name: str, **overrides: Any) -> FieldDescriptor:
        return FieldBuilder.custom(name, SolrFieldType.FLOAT, **overrides)

    @staticmethod
    def integer(name: str, **overrides: Any) -> FieldDescriptor:
        return FieldBuilder.custom(name, SolrFieldType.INT, **overrides)

    @staticmethod
    def long(name: str, **overrides: Any) -> FieldDescriptor:
        return FieldBuilder.custom(name, SolrFieldType.LONG, **overrides)

    @staticmethod
    def double(name: str, **overrides: Any) -> FieldDescriptor:
        return FieldBuilder.custom(name, SolrFieldType.DOUBLE, **overrides)

    @staticmethod
    def boolean(name: str, **overrides: Any) -> FieldDescriptor:
        return FieldBuilder.custom(name, SolrFieldType.BOOLEAN, **overrides)

    @staticmethod
    def date(name: str, **overrides: Any) -> FieldDescriptor:
        return FieldBuilder.custom(name, SolrFieldType.DATE, **overrides)

    @staticmethod
    def tag(name: str, **overrides: Any) -> FieldDescriptor:
        return FieldBuilder.custom(name, SolrFieldType.DELIMITED_PAYLOADS_STRING, **overrides)
