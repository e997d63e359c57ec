import pytest

from app.normalize import RecordIndex, is_blank, normalize_field_name


@pytest.mark.parametrize(
    "raw",
    ["USN/ID 1", "usn_id_1", "UsnId1", "Usn Id 1", "usn-id1"],
)
def test_identity_spellings_collapse(raw):
    assert normalize_field_name(raw) == "usnid1"


@pytest.mark.parametrize(
    "raw",
    ["", "Team Name", "teamName", "  ÉvÉnt—Name!! ", "UTR#Number", "123 abc", "___"],
)
def test_normalize_is_idempotent(raw):
    once = normalize_field_name(raw)
    assert normalize_field_name(once) == once
    assert all(ch.isdigit() or "a" <= ch <= "z" for ch in once)


def test_non_ascii_letters_are_dropped():
    assert normalize_field_name("Café Näme") == "cafnme"


def test_non_string_input():
    assert normalize_field_name(42) == "42"


def test_record_index_first_key_wins():
    record = {"Team Name": "first", "team_name": "second", "teamName": "third"}
    index = RecordIndex(record)
    assert index.key_for("TEAMNAME") == "Team Name"
    assert index.get("team name") == "first"


def test_record_index_has_is_existence_only():
    index = RecordIndex({"phone": ""})
    assert index.has("Phone")
    assert index.get("Phone") == ""
    assert not index.has("email")
    assert index.get("email", "n/a") == "n/a"


def test_first_filled_skips_empty_values():
    index = RecordIndex({"usn": "", "usn_1": None, "usnid1": "X1"})
    assert index.first_filled(["usn", "usn1", "usnid1"]) == "X1"


def test_first_filled_keeps_whitespace_values():
    index = RecordIndex({"usn": "  ", "usn1": "X1"})
    assert index.first_filled(["usn", "usn1"]) == "  "
    assert index.first_filled(["usn2"]) is None


def test_is_blank():
    assert is_blank(None)
    assert is_blank("")
    assert is_blank("   ")
    assert not is_blank("x")
    assert not is_blank(0)
