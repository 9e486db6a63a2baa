import pytest

from qr_raster.analyzer import Mode, analyze, choose_version, classify, make_segment, parse_mode
from qr_raster.errors import CapacityExceeded, InvalidInput, InvalidOption
from qr_raster.tables import ErrorCorrection

# Official byte-mode capacities (characters) for versions 1-10.
BYTE_CAPACITY = {
    ErrorCorrection.L: (17, 32, 53, 78, 106, 134, 154, 192, 230, 271),
    ErrorCorrection.M: (14, 26, 42, 62, 84, 106, 122, 152, 180, 213),
}


@pytest.mark.parametrize(
    "text, mode",
    [
        ("0123456789", Mode.NUMERIC),
        ("HELLO WORLD", Mode.ALPHANUMERIC),
        ("$%*+-./:", Mode.ALPHANUMERIC),
        ("https://example.com", Mode.BYTE),
        ("Hello", Mode.BYTE),
        ("café", Mode.BYTE),
    ],
)
def test_classify(text: str, mode: Mode) -> None:
    assert classify(text) is mode


def test_hello_is_alphanumeric_version_1() -> None:
    plan = analyze("HELLO", ErrorCorrection.M)
    assert plan.mode is Mode.ALPHANUMERIC
    assert plan.version == 1


def test_url_needs_version_2() -> None:
    plan = analyze("https://example.com", ErrorCorrection.M)
    assert plan.mode is Mode.BYTE
    assert plan.version == 2


@pytest.mark.parametrize("level", sorted(BYTE_CAPACITY, key=lambda level: level.ordinal))
def test_chosen_version_is_minimal(level: ErrorCorrection) -> None:
    for version, capacity in enumerate(BYTE_CAPACITY[level], start=1):
        assert analyze("a" * capacity, level).version == version
        assert analyze("a" * (capacity + 1), level).version == version + 1


def test_numeric_and_alphanumeric_capacity_version_1() -> None:
    assert analyze("1" * 34, ErrorCorrection.M).version == 1
    assert analyze("1" * 35, ErrorCorrection.M).version == 2
    assert analyze("A" * 20, ErrorCorrection.M).version == 1
    assert analyze("A" * 21, ErrorCorrection.M).version == 2


def test_count_indicator_widths() -> None:
    assert [Mode.BYTE.count_bits(v) for v in (1, 9, 10, 26, 27, 40)] == [8, 8, 16, 16, 16, 16]
    assert [Mode.ALPHANUMERIC.count_bits(v) for v in (9, 10, 26, 27)] == [9, 11, 11, 13]
    assert [Mode.NUMERIC.count_bits(v) for v in (9, 10, 26, 27)] == [10, 12, 12, 14]


def test_byte_segment_counts_utf8_bytes() -> None:
    segment = make_segment("café")
    assert segment.data == b"caf\xc3\xa9"
    assert segment.char_count == 5


def test_capacity_exceeded_at_version_40() -> None:
    segment = make_segment("a" * 2953)
    assert choose_version(segment, ErrorCorrection.L) == 40
    with pytest.raises(CapacityExceeded) as excinfo:
        choose_version(make_segment("a" * 2954), ErrorCorrection.L)
    assert excinfo.value.required_bits > excinfo.value.capacity_bits == 2956 * 8


def test_fixed_version_too_small() -> None:
    with pytest.raises(CapacityExceeded):
        analyze("a" * 20, ErrorCorrection.M, version=1)
    assert analyze("a" * 20, ErrorCorrection.M, version=5).version == 5


@pytest.mark.parametrize("text", ["", "\ud800"])
def test_invalid_text(text: str) -> None:
    with pytest.raises(InvalidInput):
        make_segment(text)


def test_forced_mode_must_accept_text() -> None:
    with pytest.raises(InvalidInput):
        make_segment("12a", Mode.NUMERIC)
    assert make_segment("123", Mode.BYTE).data == b"123"


def test_parse_mode() -> None:
    assert parse_mode("numeric") is Mode.NUMERIC
    assert parse_mode(None) is None
    with pytest.raises(InvalidOption):
        parse_mode("kanji")
