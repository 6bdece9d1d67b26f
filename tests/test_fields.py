import pytest
from pydantic import ValidationError

from solrdrv import FieldBuilder, FieldDescriptor, SolrFieldType
from solrdrv.errors import SolrUsageError


def test_string_defaults():
    field = FieldBuilder.string("name")

    assert field.name == "name"
    assert field.solr_type == "string"
    assert field.indexed is True
    assert field.stored is True
    assert field.multi_valued is False
    assert field.omit_norms is True


@pytest.mark.parametrize(
    "factory, expected_type",
    (
        (FieldBuilder.text, "lowercase"),
        (FieldBuilder.fulltext, "text_general"),
        (FieldBuilder.numeric, "pfloat"),
        (FieldBuilder.integer, "pint"),
        (FieldBuilder.long, "plong"),
        (FieldBuilder.double, "pdouble"),
        (FieldBuilder.boolean, "boolean"),
        (FieldBuilder.date, "pdate"),
        (FieldBuilder.tag, "delimited_payloads_string"),
    ),
)
def test_factory_types(factory, expected_type):
    field = factory("field")

    assert field.solr_type == expected_type
    assert field.indexed is True
    assert field.stored is True
    assert field.multi_valued is False


def test_multi_string():
    field = FieldBuilder.multi_string("tags")

    assert field.solr_type == "strings"
    assert field.multi_valued is True
    assert field.omit_norms is True


def test_factory_overrides():
    field = FieldBuilder.string("name", stored=False, omit_norms=False, doc_values=True)

    assert field.stored is False
    assert field.omit_norms is False
    assert field.doc_values is True


def test_custom_type():
    field = FieldBuilder.custom("location", "location_rpt")

    assert field.solr_type == "location_rpt"


def test_custom_with_enum():
    field = FieldBuilder.custom("age", SolrFieldType.INT)

    assert field.solr_type == "pint"


def test_override_returns_copy():
    field = FieldBuilder.long("age")
    changed = field.override(stored=False, required=True)

    assert changed.stored is False
    assert changed.required is True
    assert field.stored is True
    assert field.required is None


def test_override_unknown_property():
    with pytest.raises(SolrUsageError):
        FieldBuilder.long("age").override(colour="red")


def test_descriptor_is_frozen():
    field = FieldBuilder.string("name")
    with pytest.raises(ValidationError):
        field.stored = False


@pytest.mark.parametrize("name, solr_type", (("", "string"), ("name", "")))
def test_empty_name_or_type(name, solr_type):
    with pytest.raises(SolrUsageError):
        FieldBuilder.custom(name, solr_type)


def test_payload_uses_solr_names():
    field = FieldBuilder.multi_string(
        "tags",
        default="none",
        doc_values=True,
        omit_term_freq_and_positions=True,
        use_doc_values_as_stored=False,
    )

    assert field.to_payload() == {
        "name": "tags",
        "type": "strings",
        "indexed": True,
        "stored": True,
        "multiValued": True,
        "default": "none",
        "docValues": True,
        "omitNorms": True,
        "omitTermFreqAndPositions": True,
        "useDocValuesAsStored": False,
    }


def test_payload_omits_unset():
    assert FieldBuilder.date("birthday").to_payload() == {
        "name": "birthday",
        "type": "pdate",
        "indexed": True,
        "stored": True,
        "multiValued": False,
    }


def test_descriptor_from_solr_field():
    field = FieldDescriptor.model_validate(
        {"name": "_version_", "type": "plong", "indexed": False, "stored": False, "docValues": True}
    )

    assert field.solr_type == "plong"
    assert field.indexed is False
    assert field.doc_values is True
