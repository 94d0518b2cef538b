"""Tests for the document model: Entry, Section and Document."""

import pytest

from pymini import (
    Document,
    DocumentClosedError,
    Entry,
    InvalidInputError,
    NoActiveSectionError,
)
from pymini.ini import model


def build(*steps):
    """Replay ("section",) / ("key", "value") steps into a fresh document."""
    doc = Document("test.ini")
    for step in steps:
        if len(step) == 1:
            doc.insert_section(step[0])
        else:
            doc.insert_key_and_value(*step)
    return doc


# ---------------------------------------------------------------------------
# Entry
# ---------------------------------------------------------------------------

def test_entry_fields():
    e = Entry("key", "value")
    assert e.key == "key"
    assert e.value == "value"

def test_entry_equality_is_by_key():
    assert Entry("k", "1") == Entry("k", "2")
    assert Entry("k", "1") != Entry("K", "1")
    assert len({Entry("k", "1"), Entry("k", "2")}) == 1

def test_entry_is_immutable():
    e = Entry("k", "v")
    with pytest.raises(AttributeError):
        e.value = "other"

def test_entry_rejects_non_str():
    with pytest.raises(InvalidInputError):
        Entry(None, "v")
    with pytest.raises(InvalidInputError):
        Entry("k", 1)

def test_invalid_input_is_a_type_error():
    with pytest.raises(TypeError):
        Entry("k", None)


# ---------------------------------------------------------------------------
# Section
# ---------------------------------------------------------------------------

def test_section_starts_empty():
    sec = build(("s",))["s"]
    assert sec.name == "s"
    assert sec.key_count() == 0
    assert sec.key_at(0) is None
    assert sec.entries() == []

def test_section_first_write_wins():
    sec = build(("s",))["s"]
    sec.insert_entry("k", "1").insert_entry("k", "2")
    assert sec.key_count() == 1
    assert sec.value_of("k") == "1"

def test_section_key_at_is_newest_first():
    sec = build(("s",))["s"]
    for k in ("a", "b", "c"):
        sec.insert_entry(k, k.upper())
    assert [sec.key_at(i) for i in range(3)] == ["c", "b", "a"]
    assert sec.key_at(3) is None
    assert sec.key_at(-1) is None

def test_section_find_is_exact():
    sec = build(("s",), ("Key", "v"))["s"]
    assert sec.find("Key") == Entry("Key", "v")
    assert sec.find("key") is None
    assert sec.find(" Key") is None

def test_section_mapping_protocol():
    sec = build(("s",), ("a", "1"), ("b", "2"))["s"]
    assert list(sec) == ["b", "a"]
    assert dict(sec) == {"a": "1", "b": "2"}
    assert "a" in sec and "z" not in sec
    assert sec.get("z") is None
    with pytest.raises(KeyError):
        sec["z"]

def test_section_entries_follow_positions():
    sec = build(("s",), ("a", "1"), ("b", "2"))["s"]
    assert [e.key for e in sec.entries()] == [sec.key_at(0), sec.key_at(1)]

def test_section_repr():
    sec = build(("s",), ("a", "1"))["s"]
    assert str(sec) == "[s]"
    assert repr(sec) == "[s] { .cnt = 1 }"

def test_section_position_must_be_int():
    sec = build(("s",))["s"]
    with pytest.raises(InvalidInputError):
        sec.key_at("0")
    with pytest.raises(InvalidInputError):
        sec.key_at(True)

def test_section_entry_failure_leaves_section_unchanged(monkeypatch):
    sec = build(("s",), ("a", "1"))["s"]

    def boom(*args):
        raise MemoryError

    monkeypatch.setattr(model, "Entry", boom)
    with pytest.raises(MemoryError):
        sec.insert_entry("b", "2")
    assert list(sec) == ["a"]


# ---------------------------------------------------------------------------
# Document construction
# ---------------------------------------------------------------------------

def test_document_starts_empty():
    doc = Document("conf.ini")
    assert doc.source_name == "conf.ini"
    assert doc.section_count() == 0
    assert doc.current_section is None
    assert doc.section_at(0) is None

def test_document_requires_str_source():
    with pytest.raises(InvalidInputError):
        Document(None)

def test_insert_section_returns_document():
    doc = Document("x")
    assert doc.insert_section("a") is doc
    assert doc.insert_key_and_value("k", "v") is doc

def test_reinserting_section_does_not_duplicate():
    doc = build(("a",), ("b",), ("a",), ("b",), ("c",))
    assert doc.section_count() == 3

def test_reinserted_section_becomes_current():
    doc = build(("a",), ("b",), ("a",))
    assert doc.current_section.name == "a"

def test_round_trip_scenario():
    doc = build(("a",), ("b",), ("a",), ("k1", "v1"))
    assert doc.section_count() == 2
    assert doc.key_count("a") == 1
    assert doc.value_of("a", "k1") == "v1"

def test_reopened_older_section_receives_keys():
    # "b" is the newest section, but "a" is current: the key belongs to "a".
    doc = build(("a",), ("b",), ("a",), ("k", "v"))
    assert doc.key_count("a") == 1
    assert doc.key_count("b") == 0
    assert doc.value_of("b", "k") is None

def test_reopened_section_keeps_first_value():
    doc = build(("a",), ("k", "1"), ("b",), ("a",), ("k", "2"), ("j", "3"))
    assert doc.value_of("a", "k") == "1"
    assert doc.value_of("a", "j") == "3"
    assert doc.key_count("b") == 0

def test_duplicate_key_scenario():
    doc = build(("s",), ("k", "1"), ("k", "2"))
    assert doc.value_of("s", "k") == "1"
    assert doc.key_count("s") == 1

def test_key_without_section_is_protocol_violation():
    doc = Document("x")
    with pytest.raises(NoActiveSectionError) as exc:
        doc.insert_key_and_value("k", "v")
    assert exc.value.key == "k"
    assert doc.section_count() == 0
    assert doc.current_section is None

def test_insert_rejects_non_str():
    doc = build(("s",))
    with pytest.raises(InvalidInputError):
        doc.insert_section(None)
    with pytest.raises(InvalidInputError):
        doc.insert_key_and_value("k", None)
    assert doc.key_count("s") == 0

def test_failed_insert_section_leaves_document_unchanged(monkeypatch):
    doc = build(("a",), ("k", "v"))

    def boom(name):
        raise MemoryError

    monkeypatch.setattr(model, "Section", boom)
    with pytest.raises(MemoryError):
        doc.insert_section("b")
    assert doc.section_count() == 1
    assert doc.current_section.name == "a"
    assert "b" not in doc


# ---------------------------------------------------------------------------
# Document queries
# ---------------------------------------------------------------------------

def test_section_at_is_newest_first():
    doc = build(("a",), ("b",), ("c",), ("a",))
    names = [doc.section_at(i) for i in range(doc.section_count())]
    assert names == ["c", "b", "a"]
    assert doc.section_at(3) is None
    assert doc.section_at(-1) is None

def test_positions_shift_after_insertion():
    doc = build(("a",))
    assert doc.section_at(0) == "a"
    doc.insert_section("b")
    assert doc.section_at(0) == "b"
    assert doc.section_at(1) == "a"

def test_key_at_enumerates_every_key_once():
    doc = build(("s",), ("x", "1"), ("y", "2"), ("x", "3"), ("z", "4"))
    keys = [doc.key_at("s", i) for i in range(doc.key_count("s"))]
    assert keys == ["z", "y", "x"]
    assert doc.key_at("s", 3) is None

def test_unknown_names_give_none():
    doc = build(("s",), ("k", "v"))
    assert doc.key_count("nope") == 0
    assert doc.key_at("nope", 0) is None
    assert doc.value_of("nope", "k") is None
    assert doc.value_of("s", "nope") is None

def test_lookups_are_case_sensitive():
    doc = build(("Section",), ("Key", "v"))
    assert doc.value_of("section", "Key") is None
    assert doc.value_of("Section", "key") is None
    assert doc.value_of("Section", "Key") == "v"

def test_document_mapping_protocol():
    doc = build(("a",), ("k", "v"), ("b",))
    assert list(doc) == ["b", "a"]
    assert len(doc) == 2
    assert "a" in doc and "z" not in doc
    assert doc["a"]["k"] == "v"
    assert doc.get("z") is None
    with pytest.raises(KeyError):
        doc["z"]

def test_document_repr():
    doc = build(("a",))
    assert repr(doc) == '<Document "test.ini" { .cnt = 1 }>'
    assert str(doc) == "INI document: test.ini"


# ---------------------------------------------------------------------------
# Document lifetime
# ---------------------------------------------------------------------------

def test_close_empty_document():
    doc = Document("empty.ini")
    doc.close()
    assert doc.closed

def test_close_twice_is_harmless():
    doc = build(("a",))
    doc.close()
    doc.close()
    assert repr(doc) == '<Document "test.ini" (closed)>'

def test_closed_document_refuses_use():
    doc = build(("a",), ("k", "v"))
    doc.close()
    with pytest.raises(DocumentClosedError):
        doc.section_count()
    with pytest.raises(DocumentClosedError):
        doc.value_of("a", "k")
    with pytest.raises(DocumentClosedError):
        doc.insert_section("b")

def test_close_releases_sections():
    doc = build(("a",), ("k", "v"))
    sec = doc["a"]
    doc.close()
    with pytest.raises(DocumentClosedError):
        sec.value_of("k")
    with pytest.raises(DocumentClosedError):
        sec.insert_entry("j", "w")

def test_context_manager_closes():
    with build(("a",)) as doc:
        assert doc.section_count() == 1
    assert doc.closed
