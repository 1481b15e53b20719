"""
Codec tests

1. decode: record boundaries and operation precedence
2. decode: unknown symbols (auto-registration, leading units)
3. encode: determinism and round trip
"""

from opstring.codec import decode, encode
from opstring.registry import OperationRegistry, SymbolTable, ValueRegistry
from opstring.sequence import SequenceModel
from opstring.symbols import to_code_units


def noop(*args):
    return None


def make_table(ops="AB", values="abc"):
    operations = OperationRegistry()
    registry = ValueRegistry()
    for ch in ops:
        operations.register(ord(ch), noop)
    for ch in values:
        registry.register(ord(ch), ch)
    return SymbolTable(operations, registry)


def codes(text):
    return tuple(to_code_units(text))


# --- 1. Record boundaries ---

def test_decode_example_sequence():
    result = decode("AaabBabcc", make_table())
    assert result.operations == [
        (ord("A"), codes("aab")),
        (ord("B"), codes("abcc")),
    ]
    assert result.registered == []


def test_operation_without_arguments():
    result = decode("ABa", make_table())
    assert result.operations == [(ord("A"), ()), (ord("B"), codes("a"))]


def test_code_registered_as_both_starts_a_record():
    table = make_table()
    table.values.register(ord("B"), "bee")
    result = decode("AaBb", table)
    assert [op for op, _ in result.operations] == [ord("A"), ord("B")]


# --- 2. Unknown symbols ---

def test_unknown_argument_is_registered_as_none():
    table = make_table()
    result = decode("Ba?c", table)
    assert result.operations == [(ord("B"), codes("a?c"))]
    assert result.registered == [ord("?")]
    assert ord("?") in table.values
    assert table.values.resolve(ord("?")) is None


def test_unknown_is_registered_once():
    table = make_table()
    result = decode("B??A?", table)
    assert result.registered == [ord("?")]
    assert result.operations[1] == (ord("A"), codes("?"))


def test_leading_units_are_dropped():
    table = make_table()
    result = decode("xyAa", table)
    assert result.operations == [(ord("A"), codes("a"))]
    assert result.dropped == 2
    assert ord("x") not in table.values


def test_no_operation_at_all():
    result = decode("abc", make_table())
    assert len(result) == 0


def test_decode_without_registration():
    table = make_table()
    result = decode("Ba?", table, register_unknown=False)
    assert result.operations == [(ord("B"), codes("a?"))]
    assert result.registered == []
    assert ord("?") not in table.values


def test_astral_arguments_decode_as_two_units():
    table = make_table()
    result = decode("A\U0001F600", table)
    assert result.operations == [(ord("A"), (0xD83D, 0xDE00))]


# --- 3. Encoding ---

def build_model():
    model = SequenceModel()
    model.append(ord("A"), codes("aab"))
    model.insert(0, ord("B"), codes("abcc"))
    model.append(ord("A"), ())
    return model


def test_encode_is_idempotent():
    model = build_model()
    assert encode(model.records) == encode(model.records) == "BabccAaabA"


def test_round_trip_preserves_codes_and_order():
    model = build_model()
    decoded = decode(encode(model.records), make_table())
    assert decoded.operations == [(r.operation, r.values) for r in model.records]


def test_round_trip_of_raw_unknown_codes_is_lossy_by_value():
    model = SequenceModel()
    model.append(ord("A"), (500,))
    table = make_table()
    decoded = decode(encode(model.records), table)
    assert decoded.operations == [(ord("A"), (500,))]
    assert table.values.resolve(500) is None
