"""
CLI tests

1. encode
2. decode (text and JSON)
3. run (lenient and strict)
"""

import json

from opstring.cli import main, parse_value


RUN_SHAPES = [
    "--no-color", "run", "AaabBabcc",
    "--op", "A=circle", "--op", "B=rect",
    "--value", "a=30", "--value", "b=20", "--value", "c=55",
]


# --- 1. encode ---

def test_encode(capsys):
    assert main(["--no-color", "encode", "A:a,a,b", "B:a,b,c,c"]) == 0
    assert capsys.readouterr().out == "AaabBabcc\n"


def test_encode_numeric_codes(capsys):
    assert main(["--no-color", "encode", "65:97,98", "B"]) == 0
    assert capsys.readouterr().out == "AabB\n"


def test_encode_rejects_bad_symbol(capsys):
    assert main(["--no-color", "encode", "AB:a"]) == 1
    assert "Could not append" in capsys.readouterr().out


# --- 2. decode ---

def test_decode_shows_records_and_registered_symbols(capsys):
    assert main(["--no-color", "decode", "Ba?c", "--ops", "AB", "--values", "abc"]) == 0
    out = capsys.readouterr().out
    assert "1 operation(s)" in out
    assert "'B'(66)" in out
    assert "Registered as None: '?'(63)" in out


def test_decode_json(capsys):
    assert main(["--no-color", "decode", "AabBc", "--ops", "AB", "--json"]) == 0
    assert json.loads(capsys.readouterr().out) == [
        {"id": 1, "operation": 65, "values": [97, 98]},
        {"id": 2, "operation": 66, "values": [99]},
    ]


def test_decode_without_operations(capsys):
    assert main(["--no-color", "decode", "abc"]) == 0
    assert "No operations found" in capsys.readouterr().out


# --- 3. run ---

def test_run_traces_calls(capsys):
    assert main(RUN_SHAPES) == 0
    assert capsys.readouterr().out == "> circle(30, 30, 20)\n> rect(30, 20, 55, 55)\n"


def test_run_strict_refuses_long_sequence(capsys):
    assert main(RUN_SHAPES + ["--max-length", "5", "--strict"]) == 1
    out = capsys.readouterr().out
    assert "Sequence refused" in out
    assert "circle" not in out


def test_run_lenient_long_sequence_still_runs(capsys):
    assert main(RUN_SHAPES + ["--max-length", "5", "-v"]) == 0
    out = capsys.readouterr().out
    assert "> rect(30, 20, 55, 55)" in out
    assert "Calls:   2" in out


def test_parse_value():
    assert parse_value("30") == 30
    assert parse_value("null") is None
    assert parse_value("hello") == "hello"
