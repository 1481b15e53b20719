"""
Symbol Resolver tests

1. Classification (including the digit-string quirk)
2. Resolution to codes
3. UTF-16 code-unit helpers
"""

from opstring.symbols import (
    SymbolKind,
    char_for_code,
    classify,
    describe,
    from_code_units,
    resolve_to_code,
    to_code_units,
    unit_length,
)


# --- 1. Classification ---

def test_single_character_is_string_char():
    assert classify("A") is SymbolKind.STRING_CHAR


def test_integer_is_integer():
    assert classify(65) is SymbolKind.INTEGER
    assert classify(0) is SymbolKind.INTEGER


def test_digit_string_is_integer():
    assert classify("5") is SymbolKind.INTEGER
    assert classify("123") is SymbolKind.INTEGER


def test_multi_character_string_is_still_string_char():
    # Length is checked by validation, not by classification.
    assert classify("ab") is SymbolKind.STRING_CHAR
    assert classify("") is SymbolKind.STRING_CHAR


def test_digits_with_trailing_newline_are_not_integer():
    assert classify("5\n") is SymbolKind.STRING_CHAR


def test_invalid_symbols():
    for symbol in (None, 1.5, True, False, ["A"], {"A": 1}):
        assert classify(symbol) is SymbolKind.INVALID, symbol


# --- 2. Resolution ---

def test_resolve_character():
    assert resolve_to_code("A") == 65
    assert resolve_to_code("a") == 97


def test_resolve_digit_string_to_its_number():
    assert resolve_to_code("5") == 5
    assert resolve_to_code("5") != ord("5")


def test_resolve_integer_unchanged():
    assert resolve_to_code(97) == 97


def test_resolve_long_digit_strings():
    assert resolve_to_code("0" * 5000 + "65") == 65
    oversized = "9" * 5000
    assert resolve_to_code(oversized) is oversized


def test_resolve_invalid_returns_raw_value():
    assert resolve_to_code(None) is None
    assert resolve_to_code(1.5) == 1.5


def test_resolve_uses_first_unit_of_longer_string():
    assert resolve_to_code("ab") == 97


# --- 3. Code units ---

def test_ascii_units():
    assert to_code_units("Aab") == [65, 97, 98]
    assert from_code_units([65, 97, 98]) == "Aab"


def test_astral_character_is_a_surrogate_pair():
    assert to_code_units("A\U0001F600") == [65, 0xD83D, 0xDE00]
    assert unit_length("\U0001F600") == 2
    assert from_code_units([65, 0xD83D, 0xDE00]) == "A\U0001F600"


def test_lone_surrogate_survives():
    assert to_code_units(char_for_code(0xD800)) == [0xD800]


def test_empty():
    assert to_code_units("") == []
    assert from_code_units([]) == ""
    assert unit_length("") == 0


def test_describe_bounds_huge_arguments():
    assert describe("A") == "'A'"
    assert describe(65) == "65"
    assert describe(10 ** 5000).startswith("<integer of")
    long_text = "9" * 5000
    assert describe(long_text).endswith("(5000 characters)")
    assert len(describe(long_text)) < 80
