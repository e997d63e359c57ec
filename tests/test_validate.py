import pytest

from app.exceptions import UnknownEvent
from app.schemas import REGISTRY, EventSchema, SchemaRegistry
from app.validate import validate_record


@pytest.fixture
def abc_registry():
    return SchemaRegistry([
        EventSchema(
            event_key="abc",
            display_name="ABC",
            file_name="abc.csv",
            columns=("A", "B", "C"),
            required_fields=("a", "b", "c"),
        )
    ])


def test_missing_fields_keep_declaration_order(abc_registry):
    result = validate_record(abc_registry, "abc", {"zzz": 1, "A": "x"})
    assert not result.ok
    assert result.missing == ["b", "c"]

    result = validate_record(abc_registry, "abc", {"A": "x", "zzz": 1})
    assert result.missing == ["b", "c"]


def test_complete_record_passes(abc_registry):
    result = validate_record(abc_registry, "abc", {"C": 3, "b": 2, "a_": 1})
    assert result.ok
    assert result.missing == []
    assert result.schema.event_key == "abc"


def test_empty_value_counts_as_present_by_default(abc_registry):
    result = validate_record(abc_registry, "abc", {"a": "", "b": None, "c": "x"})
    assert result.ok


def test_blank_is_missing_option(abc_registry):
    result = validate_record(
        abc_registry, "abc", {"a": "", "b": None, "c": "x"}, blank_is_missing=True
    )
    assert result.missing == ["a", "b"]


def test_unknown_event_raises(abc_registry):
    with pytest.raises(UnknownEvent) as excinfo:
        validate_record(abc_registry, "missing", {"a": 1})
    assert excinfo.value.event_key == "missing"


def test_header_style_keys_satisfy_camel_case_requirements():
    record = {
        "Team Name": "Alpha",
        "Name 1": "Asha",
        "USN": "1AB",
        "College": "ABC",
        "Phone": "9",
        "Email": "a@b.com",
        "UTR ID": "U1",
        "UTR Number": "1",
    }
    assert validate_record(REGISTRY, "drishti", record).ok
