from __future__ import annotations

import math
from pathlib import PurePath
from typing import Dict, List, Optional

import pytest

from propedit import InvalidKeyError, LineEntryError, PropertiesDocument
from propedit.storage import split_lines


class MemoryStore:
    def __init__(self, files: Optional[Dict[str, bytes]] = None) -> None:
        self.files: Dict[str, bytes] = dict(files or {})
        self.created: List[str] = []

    def read_all_lines(self, path: PurePath | str, encoding: str) -> List[str]:
        try:
            data = self.files[str(path)]
        except KeyError as exc:
            raise FileNotFoundError(str(path)) from exc
        return split_lines(data.decode(encoding))

    def write_all_bytes(self, path: PurePath | str, data: bytes) -> None:
        self.files[str(path)] = data

    def file_exists(self, path: PurePath | str) -> bool:
        return str(path) in self.files

    def create_empty_file(self, path: PurePath | str) -> None:
        self.created.append(str(path))
        self.files[str(path)] = b""


def make_document(
    *lines: str, separator: str = "=", store: Optional[MemoryStore] = None
) -> PropertiesDocument:
    backing = store or MemoryStore()
    backing.files["app.properties"] = "".join(f"{line}\n" for line in lines).encode()
    document = PropertiesDocument(
        "app.properties", newline="\n", separator=separator, store=backing
    )
    document.load()
    return document


def snapshot(document: PropertiesDocument) -> tuple:
    return (document.get_all_lines(), dict(document.properties))


def test_constructor_creates_missing_file_without_loading() -> None:
    store = MemoryStore()

    document = PropertiesDocument("new.properties", newline="\n", store=store)

    assert store.created == ["new.properties"]
    assert document.line_count == 0


def test_constructor_keeps_existing_file() -> None:
    store = MemoryStore({"app.properties": b"a=1\n"})

    document = PropertiesDocument("app.properties", newline="\n", store=store)

    assert store.created == []
    assert store.files["app.properties"] == b"a=1\n"
    assert document.line_count == 0


def test_constructor_rejects_multi_character_separator() -> None:
    with pytest.raises(ValueError):
        PropertiesDocument("app.properties", separator="::", store=MemoryStore())


def test_comment_scenario() -> None:
    document = make_document("# comment", "", "name=Alice", "age = 30")

    assert document.get_int("age") == 30
    assert document.get_string("name") == "Alice"
    assert document.get_full_text() == "# comment\n\nname=Alice\nage = 30\n"

    document.set_property("name", "Bob")

    assert document.get_full_text() == "# comment\n\nname=Bob\nage = 30\n"
    assert document.line_count == 4


def test_load_round_trips_lines() -> None:
    lines = [
        "foo=bar",
        "foo2 = bar",
        "  padded  =   value",
        "empty=",
        "keyonly",
        "# note = not a property",
        "   # indented comment",
        "",
        "   ",
        "url=http://example.com/?a=b",
    ]

    document = make_document(*lines)

    assert document.get_all_lines() == lines
    assert list(document) == lines


def test_blank_value_drops_trailing_padding() -> None:
    document = make_document("blank =   ")

    assert document["blank"] == ""
    assert document.get_all_lines() == ["blank ="]


def test_load_replaces_previous_state() -> None:
    store = MemoryStore()
    document = make_document("a=1", "b=2", store=store)
    document.add_line_entry("c=3")

    store.files["app.properties"] = b"z=26\n"
    document.load()

    assert document.get_all_lines() == ["z=26"]
    assert document.keys() == ("z",)


def test_load_failure_keeps_state() -> None:
    store = MemoryStore()
    document = make_document("a=1", store=store)
    before = snapshot(document)
    del store.files["app.properties"]

    with pytest.raises(FileNotFoundError):
        document.load()

    assert snapshot(document) == before


def test_ingest_splits_on_first_separator() -> None:
    document = make_document()

    document.add_line_entry("expr = a=b=c")
    document.insert_line_entry(0, "url=http://host/?x=1")

    assert document["expr"] == "a=b=c"
    assert document["url"] == "http://host/?x=1"
    assert document.get_all_lines() == ["url=http://host/?x=1", "expr = a=b=c"]


def test_stored_prefix_excludes_value() -> None:
    document = make_document("foo =   bar  ")

    (entry,) = document.entries()

    assert entry.text == "foo =   "
    assert entry.key == "foo"
    assert document["foo"] == "bar"
    assert document[0] == "foo =   bar"


def test_set_property_updates_existing_line_in_place() -> None:
    document = make_document("host = localhost", "port=80")

    document.set_property("host", "example.org")

    assert document.line_count == 2
    assert document[0] == "host = example.org"


def test_set_property_appends_new_line() -> None:
    document = make_document("# settings", "a=1")

    document.set_property("x", "1")

    assert document.get_property_entry_index("x") == 2
    assert document["x"] == "1"
    assert document[2] == "x=1"


def test_set_property_is_idempotent() -> None:
    document = make_document("a=1")

    document.set_property("k", "v")
    once = snapshot(document)
    document.set_property("k", "v")

    assert snapshot(document) == once
    assert document.line_count == 2


def test_set_property_trims_key_and_value() -> None:
    document = make_document()

    document.set_property("  spaced  ", "  value  ")

    assert document["spaced"] == "value"
    assert document.get_all_lines() == ["spaced=value"]


def test_set_property_stringifies_values() -> None:
    document = make_document()

    document.set_property("port", 8080)
    document["debug"] = True

    assert document["port"] == "8080"
    assert document.get_int("port") == 8080
    assert document.get_bool("debug") is True


def test_set_property_on_key_only_line_inserts_separator() -> None:
    document = make_document("flag")

    document.set_property("flag", "on")

    assert document.line_count == 1
    assert document[0] == "flag=on"


def test_key_only_line_is_stored_trimmed() -> None:
    document = make_document("  flag  ")

    assert document.entries()[0].text == "flag"
    assert document[0] == "flag"

    document.set_property("flag", "on")

    assert document[0] == "flag=on"


def test_integer_accessors_parse_valid_values() -> None:
    document = make_document("age = 30", "small=-128", "wide=4294967295")

    assert document.get_int("age") == 30
    assert document.get_short("small") == -128
    assert document.get_byte("age") == 30
    assert document.get_unsigned_int("wide") == 4294967295
    assert document.get_int("wide") == 0
    assert document.get_long("wide") == 4294967295
    assert document.get_unsigned_long("age") == 30
    assert document.get_unsigned_short("age") == 30


def test_invalid_key_leaves_state_unchanged() -> None:
    document = make_document("a=1")
    before = snapshot(document)

    for key in ("bad=key", "#hidden", "   # hidden", "multi\nline"):
        with pytest.raises(InvalidKeyError):
            document.set_property(key, "v")

    assert snapshot(document) == before


def test_invalid_value_leaves_state_unchanged() -> None:
    document = make_document("a=1")
    before = snapshot(document)

    with pytest.raises(LineEntryError):
        document.set_property("a", "two\nlines")
    with pytest.raises(LineEntryError):
        document.set_property("b", "carriage\rreturn")

    assert snapshot(document) == before


def test_line_entries_reject_line_breaks() -> None:
    document = make_document("a=1")
    before = snapshot(document)

    with pytest.raises(LineEntryError):
        document.add_line_entry("b=2\nc=3")
    with pytest.raises(LineEntryError):
        document.insert_line_entry(0, "b=2\n")
    with pytest.raises(LineEntryError):
        document.set_line_entry(0, "b=\n")

    assert snapshot(document) == before


def test_index_bounds() -> None:
    document = make_document("a=1", "b=2")
    before = snapshot(document)

    with pytest.raises(IndexError):
        document.get_line_entry(2)
    with pytest.raises(IndexError):
        document.get_line_entry(-1)
    with pytest.raises(IndexError):
        document.set_line_entry(2, "c=3")
    with pytest.raises(IndexError):
        document.insert_line_entry(3, "c=3")
    with pytest.raises(IndexError):
        document.remove_line_entry_at(5)

    assert snapshot(document) == before


def test_insert_at_end_appends() -> None:
    document = make_document("a=1")

    document.insert_line_entry(1, "b=2")
    document.insert_line_entry(0, "# head")

    assert document.get_all_lines() == ["# head", "a=1", "b=2"]


def test_remove_line_leaves_ghost_key() -> None:
    document = make_document("# keep", "k=v")

    document.remove_line_entry_at(1)

    assert document.has_property("k")
    assert document["k"] == "v"
    assert document.get_property_entry_index("k") == -1
    assert document.get_all_lines() == ["# keep"]


def test_set_property_on_ghost_key_appends_line() -> None:
    document = make_document("k=v")
    document.remove_line_entry_at(0)

    document.set_property("k", "w")

    assert document.get_all_lines() == ["k=w"]


def test_set_line_entry_replaces_slot() -> None:
    document = make_document("a=1", "b=2")

    document.set_line_entry(0, "a = 10")
    document[1] = "# b removed"

    assert document.get_all_lines() == ["a = 10", "# b removed"]
    assert document["a"] == "10"
    assert document.has_property("b")


def test_duplicate_keys_share_latest_value() -> None:
    document = make_document("a=1", "# between", "a = 2")

    assert document.get_all_lines() == ["a=2", "# between", "a = 2"]
    assert document.get_property_entry_index("a") == 0

    document.set_property("a", "3")

    assert document.get_all_lines() == ["a=3", "# between", "a = 3"]


def test_comment_lines_never_become_properties() -> None:
    document = make_document("#x=1", "  # y = 2")

    assert document.keys() == ()
    assert document.get_all_lines() == ["#x=1", "  # y = 2"]


def test_property_lookup_normalizes_key() -> None:
    document = make_document("name=Alice")

    assert document["  name "] == "Alice"
    assert document.get_property_entry_index(" name") == 0
    assert document["missing"] is None
    assert document.has_property(" name") is False
    assert "name" in document


def test_lookup_rejects_malformed_keys() -> None:
    document = make_document("a=1")

    with pytest.raises(InvalidKeyError):
        document.get_property_entry_index("a=1")
    with pytest.raises(InvalidKeyError):
        document.get_string("#a")


def test_custom_separator() -> None:
    document = make_document("host: localhost", "a=b: c", separator=":")

    document.set_property("port", "8080")

    assert document["host"] == "localhost"
    assert document["a=b"] == "c"
    assert document.get_all_lines() == ["host: localhost", "a=b: c", "port:8080"]
    with pytest.raises(InvalidKeyError):
        document.set_property("bad:key", "v")


def test_full_text_uses_document_newline() -> None:
    store = MemoryStore({"app.properties": b"a=1\r\n# c\r\n"})
    document = PropertiesDocument("app.properties", newline="\r\n", store=store)
    document.load()

    assert document.get_full_text() == "a=1\r\n# c\r\n"


def test_empty_document_renders_empty_text() -> None:
    document = make_document()

    assert document.get_full_text() == ""
    assert document.get_all_lines() == []


def test_clear_all() -> None:
    document = make_document("a=1", "# c")

    document.clear_all()

    assert len(document) == 0
    assert document.has_property("a") is False


def test_save_writes_full_text_with_encoding() -> None:
    store = MemoryStore()
    document = make_document("# cafe", store=store)
    document.encoding = "latin-1"

    document.set_property("name", "café")
    document.save()

    assert store.files["app.properties"] == b"# cafe\nname=caf\xe9\n"


def test_dunder_access() -> None:
    document = make_document("a=1")

    document["b"] = "2"
    assert document[1] == "b=2"

    del document[0]

    assert len(document) == 1
    assert document.get_all_lines() == ["b=2"]
    assert document["a"] == "1"


def test_typed_accessors_are_lenient() -> None:
    document = make_document(
        "count=42",
        "ratio=0.25",
        "big=40000",
        "neg=-1",
        "flag=TRUE",
        "letter=x",
        "word=xy",
        "when=2024-03-01T12:30:00",
        "junk=abc",
    )

    assert document.get_int("count") == 42
    assert document.get_int("ratio") == 0
    assert document.get_int("junk", default=7) == 7
    assert document.get_short("big") == 0
    assert document.get_unsigned_short("big") == 40000
    assert document.get_unsigned_int("neg") == 0
    assert document.get_long("neg") == -1
    assert document.get_byte("count") == 42
    assert document.get_double("ratio") == 0.25
    assert math.isnan(document.get_double("junk"))
    assert document.get_bool("flag") is True
    assert document.get_bool("junk") is False
    assert document.get_char("letter") == "x"
    assert document.get_char("word") == "\0"
    assert document.get_datetime("when").hour == 12
    assert document.get_datetime("junk").year == 1


def test_missing_float_is_nan() -> None:
    document = make_document()

    assert math.isnan(document.get_float("missing_key"))
    assert document.get_int("missing_key") == 0
    assert document.get_string("missing_key") is None
