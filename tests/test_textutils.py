import pytest

from cubcaster.textutils import (
    ColourRangeError,
    is_blank,
    parse_colour_component,
    read_raw_lines,
    split_fields,
    strip_chars,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("255", 255),
        ("0", 0),
        ("  +7", 7),
        ("-12", -12),
        ("12abc", 12),
        ("\t\n 3", 3),
        ("0000255", 255),
    ],
)
def test_parse_colour_component_values(text, expected):
    assert parse_colour_component(text) == expected


def test_parse_colour_component_without_digits_is_zero():
    assert parse_colour_component("") == 0
    assert parse_colour_component("abc") == 0


@pytest.mark.parametrize("text", ["256", "999", "  1000", "-300"])
def test_parse_colour_component_out_of_range(text):
    with pytest.raises(ColourRangeError):
        parse_colour_component(text)


def test_colour_range_error_is_value_error():
    with pytest.raises(ValueError):
        parse_colour_component("4096")


def test_split_fields_drops_empty_fields():
    assert split_fields("NO  ./a.png", " ") == ["NO", "./a.png"]
    assert split_fields("1,,2,", ",") == ["1", "2"]


def test_split_fields_empty_inputs():
    assert split_fields("", ",") == []
    assert split_fields(",,,", ",") == []


def test_split_fields_round_trip():
    parts = ["10", "20", "30"]
    assert split_fields(",".join(parts), ",") == parts


def test_strip_chars_trims_both_ends():
    assert strip_chars("  F 1,2,3  ", " ") == "F 1,2,3"
    assert strip_chars("xxabcxx", "x") == "abc"


def test_strip_chars_all_removed():
    assert strip_chars("     ", " ") == ""


def test_strip_chars_without_set_is_unchanged():
    assert strip_chars("  a  ", "") == "  a  "
    assert strip_chars("  a  ", None) == "  a  "


@pytest.mark.parametrize("line", ["", " ", "     "])
def test_is_blank_true(line):
    assert is_blank(line) is True


@pytest.mark.parametrize("line", [" x", "1", "\t", "  0  "])
def test_is_blank_false(line):
    assert is_blank(line) is False


def test_read_raw_lines_keeps_newlines(tmp_path):
    path = tmp_path / "map.cub"
    path.write_bytes(b"a\nb\n")
    assert read_raw_lines(path) == ["a\n", "b\n"]


def test_read_raw_lines_last_line_without_newline(tmp_path):
    path = tmp_path / "map.cub"
    path.write_bytes(b"a\n\nb")
    assert read_raw_lines(path) == ["a\n", "\n", "b"]


def test_read_raw_lines_empty_file(tmp_path):
    path = tmp_path / "empty.cub"
    path.write_bytes(b"")
    assert read_raw_lines(path) == []


def test_read_raw_lines_round_trip(tmp_path):
    content = "NO ./n.png\nF 1,2,3\n\n111\n1N1\n111"
    path = tmp_path / "scene.cub"
    path.write_bytes(content.encode())
    lines = read_raw_lines(path)
    assert "".join(lines) == content
    assert all(line.endswith("\n") for line in lines[:-1])


def test_read_raw_lines_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_raw_lines(tmp_path / "missing.cub")