from __future__ import annotations

import pytest

from flatini.ini import (
    DEFAULT_SECTION,
    DuplicateSection,
    IniClass,
    IniParseError,
    InvalidLine,
    MalformedDocument,
    MalformedSection,
    clean_line,
    parse,
)


def test_parse_empty_content() -> None:
    assert len(parse("")) == 0
    assert len(parse("\n\n   \n; only a comment\n")) == 0


def test_pairs_before_header_go_to_default() -> None:
    cfg = parse("key=value")
    assert [s.name for s in cfg] == [DEFAULT_SECTION]
    assert cfg.get_section("default") == [("key", "value")]


def test_sections_keep_order_and_duplicates() -> None:
    cfg = parse(
        "\n".join(
            [
                "top = 1",
                "[server]",
                "host = a",
                "host = b",
                "[client]",
                "[server]",
                "port = 80",
            ]
        )
    )
    assert [s.name for s in cfg] == ["default", "server", "client", "server"]
    assert cfg.get_section("server") == [("host", "a"), ("host", "b")]
    assert cfg.get_value("server", "host") == "a"
    assert cfg.get_value("server", "port") is None
    assert cfg.sections[3].pairs == [("port", "80")]


def test_whitespace_is_trimmed() -> None:
    cfg = parse("  [  my section ]  \n\t key   =   some value  \n")
    assert cfg.get_value("my section", "key") == "some value"


def test_comment_after_value() -> None:
    cfg = parse("[db]\nhost = localhost ; primary\nport = 5432 # default")
    assert cfg.get_value("db", "host") == "localhost"
    assert cfg.get_value("db", "port") == "5432"


def test_comment_markers_anywhere() -> None:
    assert clean_line("a = b # c ; d") == "a = b"
    assert clean_line("a = b ; c # d") == "a = b"
    assert clean_line("  # whole line") == ""
    assert clean_line("[sect] ; trailing") == "[sect]"


def test_empty_value_is_allowed() -> None:
    cfg = parse("[a]\nkey =\n")
    assert cfg.get_value("a", "key") == ""


def test_two_equal_signs_rejected() -> None:
    with pytest.raises(InvalidLine) as exc:
        parse("[a]\nok = 1\na=b=c\n")
    assert exc.value.lineno == 3
    assert exc.value.line == "a=b=c"


@pytest.mark.parametrize("line", ["just text", "= value", "   =", "[unclosed"])
def test_invalid_lines(line: str) -> None:
    with pytest.raises(IniParseError) as exc:
        parse(f"[a]\n{line}")
    assert isinstance(exc.value, InvalidLine)
    assert exc.value.lineno == 2
    assert exc.value.line == line


def test_invalid_line_keeps_raw_text() -> None:
    raw = "  garbage here ; with comment"
    with pytest.raises(InvalidLine) as exc:
        parse(raw)
    assert exc.value.lineno == 1
    assert exc.value.line == raw


def test_comment_can_hide_second_equal_sign() -> None:
    cfg = parse("url = a ; b=c")
    assert cfg.get_value("default", "url") == "a"


def test_roundtrip_keeps_triples() -> None:
    cfg = IniClass()
    cfg.add_value("first", "a", "1").add_value("first", "b", "two words")
    cfg.add_section("empty")
    cfg.add_value("last", "a", "")
    again = parse(cfg.to_text())
    assert list(again.triples()) == list(cfg.triples())
    assert [s.name for s in again] == ["first", "empty", "last"]


def test_error_hierarchy_fields() -> None:
    dup = DuplicateSection("server")
    bad = MalformedSection(4, "[oops")
    invalid = InvalidLine(2, "a=b=c")

    for err in (dup, bad, invalid, MalformedDocument("no sections")):
        assert isinstance(err, IniParseError)
    assert dup.name == "server"
    assert (bad.lineno, bad.line) == (4, "[oops")
    assert (invalid.lineno, invalid.line) == (2, "a=b=c")
    assert "server" in str(dup)


def test_empty_brackets_are_a_section_named_empty_string() -> None:
    cfg = parse("[]\nk = v\n")
    assert [s.name for s in cfg] == [""]
    assert cfg.get_value("", "k") == "v"


def test_repeated_header_does_not_raise() -> None:
    cfg = parse("[a]\nx = 1\n[a]\nx = 2\n")
    assert [s.name for s in cfg] == ["a", "a"]
    assert cfg.get_value("a", "x") == "1"
