import pytest

from solong.printfmt import format_printf, print_formatted


@pytest.mark.parametrize("n", [0, 7, -7, 123456, -987654, 2147483647, -2147483648])
def test_decimal_round_trip(n):
    assert int(format_printf("%d", n)) == n


@pytest.mark.parametrize("n", [0, 5, -42, 1000])
def test_i_matches_d(n):
    assert format_printf("%i", n) == format_printf("%d", n)


def test_decimal_wraps_like_int32():
    assert format_printf("%d", 2**31) == "-2147483648"


@pytest.mark.parametrize("n", [0, 1, 15, 255, 4096, 0xDEADBEEF])
def test_hex_round_trip_and_case(n):
    lower = format_printf("%x", n)
    upper = format_printf("%X", n)
    assert int(lower, 16) == n
    assert lower == lower.lower()
    assert upper == lower.upper()


def test_unsigned_of_minus_one():
    assert format_printf("%u", -1) == "4294967295"


@pytest.mark.parametrize("n", [0, 9, 10, 4000000000])
def test_unsigned_round_trip(n):
    assert int(format_printf("%u", n)) == n


def test_string_and_null_string():
    assert format_printf("%s", "abc") == "abc"
    assert format_printf("%s", None) == "(null)"


def test_null_pointer():
    assert format_printf("%p", None) == "0x0"
    assert format_printf("%p", 0) == "0x0"


def test_pointer_is_hex():
    result = format_printf("%p", 0xBEEF)
    assert result.startswith("0x")
    assert int(result, 16) == 0xBEEF


def test_char_from_string_and_int():
    assert format_printf("%c", "A") == "A"
    assert format_printf("%c", 65) == chr(65)


def test_percent_literal():
    assert format_printf("100%%") == "100%"


def test_unknown_conversion_consumes_nothing():
    assert format_printf("a%qb%d", 5) == "ab5"


def test_trailing_percent_is_dropped():
    assert format_printf("ab%") == "ab"


def test_missing_argument_raises():
    with pytest.raises(TypeError):
        format_printf("%d %d", 1)


def test_plain_text_with_number():
    assert format_printf("Total moves: %d\n", 3) == "Total moves: 3\n"


def test_print_formatted_writes_and_counts(capsys):
    count = print_formatted("Error\nInvalid character in map: %c\n", "X")
    out = capsys.readouterr().out
    assert out == format_printf("Error\nInvalid character in map: %c\n", "X")
    assert count == len(out.encode("utf-8"))


def test_print_formatted_counts_bytes(capsys):
    count = print_formatted("%s", "❌")
    out = capsys.readouterr().out
    assert out == "❌"
    assert count == len("❌".encode("utf-8"))