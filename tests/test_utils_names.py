import pytest

from utils.names import MAX_NAME_LENGTH, name_part, sanitize_filename, unique_names

FORBIDDEN = '\\/:*?"<>|'


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("my photo.png", "my_photo.png"),
        ("a/b\\c:d", "a_b_c_d"),
        ('x<>:"|?*y', "x_y"),
        ("tab\tnew\r\nline", "tab_new_line"),
        ("  padded  ", "_padded_"),
        ("../../etc/passwd", ".._.._etc_passwd"),
        ("..", "file"),
        ("", "file"),
        (None, "file"),
    ],
)
def test_sanitize_filename(raw, expected):
    assert sanitize_filename(raw) == expected


@pytest.mark.parametrize(
    "raw",
    ["my photo.png", "a" * 500, 'we?ird / na:me "x"\t\r\n', "  ", "ok.txt", "x" * 119 + " y"],
)
def test_sanitize_is_idempotent_and_bounded(raw):
    once = sanitize_filename(raw)
    assert sanitize_filename(once) == once
    assert len(once) <= MAX_NAME_LENGTH
    assert not any(ch in once for ch in FORBIDDEN + "\r\n\t")


def test_name_part_fallbacks_and_underscores():
    assert name_part("  Ann   Lee ", "unknown") == "Ann_Lee"
    assert name_part(None, "unknown") == "unknown"
    assert name_part("   ", "idea") == "idea"


def test_unique_names_renames_later_duplicates():
    names = ["a.png", "b.png", "a.png", "a.png", "README"]
    assert unique_names(names) == ["a.png", "b.png", "a-2.png", "a-3.png", "README"]


def test_unique_names_respects_reserved():
    assert unique_names(["data.json", "x"], reserved=["data.json"]) == ["data-2.json", "x"]


def test_unique_names_stays_within_limit():
    long_name = "n" * MAX_NAME_LENGTH
    first, second = unique_names([long_name, long_name])
    assert first == long_name
    assert len(second) == MAX_NAME_LENGTH
    assert second.endswith("-2")


@pytest.mark.parametrize("raw", ["a\x00b.txt", "bell\x07.txt", "esc\x1b[0m", "del\x7f"])
def test_sanitize_replaces_control_characters(raw):
    sanitized = sanitize_filename(raw)
    assert not any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in sanitized)
    assert sanitize_filename(sanitized) == sanitized


def test_unique_names_with_long_suffix_stays_within_limit():
    long_suffix = "a." + "x" * 118
    first, second = unique_names([long_suffix, long_suffix])
    assert first == long_suffix
    assert len(second) <= MAX_NAME_LENGTH
    assert second.endswith("-2")
