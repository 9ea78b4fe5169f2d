import dataclasses

import pytest

from specification import (
    ConfigError,
    EmptyAlphabet,
    InvalidCount,
    InvalidSymbol,
    MultiCharacterSymbol,
    Specification,
    SymbolNotInAlphabet,
    TargetStringSymbolNotInAlphabet,
)


def make(alphabet=("a", "b"), target_string="ab", target_char="a", required_count=2):
    return Specification(
        alphabet=alphabet,
        target_string=target_string,
        target_char=target_char,
        required_count=required_count,
    )


def test_valid_specification():
    spec = make()
    assert spec.alphabet == ("a", "b")
    assert spec.target_string == "ab"
    assert spec.target_char == "a"
    assert spec.required_count == 2
    assert spec.suffix_length == 2
    assert spec.overflow_count == 3


def test_alphabet_string_is_split_and_deduplicated():
    assert make(alphabet="abba").alphabet == ("a", "b")
    assert make(alphabet=["b", "a", "b"]).alphabet == ("b", "a")


def test_empty_target_string_is_allowed():
    assert make(target_string="").suffix_length == 0


def test_specification_is_immutable():
    spec = make()
    with pytest.raises(dataclasses.FrozenInstanceError):
        spec.required_count = 3


def test_empty_alphabet():
    with pytest.raises(EmptyAlphabet):
        make(alphabet=())


def test_multi_character_symbol():
    with pytest.raises(MultiCharacterSymbol) as exc_info:
        make(alphabet=("a", "bc"))
    assert exc_info.value.symbol == "bc"


def test_target_char_not_in_alphabet():
    with pytest.raises(SymbolNotInAlphabet) as exc_info:
        make(target_char="c")
    assert exc_info.value.symbol == "c"


def test_target_string_symbol_not_in_alphabet():
    with pytest.raises(TargetStringSymbolNotInAlphabet) as exc_info:
        make(target_string="abc")
    assert exc_info.value.symbol == "c"
    assert exc_info.value.target_string == "abc"


@pytest.mark.parametrize("count", [0, -1, 1.5, "2", None, True])
def test_invalid_count(count):
    with pytest.raises(InvalidCount):
        make(required_count=count)


def test_checks_stop_at_first_failure():
    with pytest.raises(EmptyAlphabet):
        make(alphabet=(), target_char="z", required_count=0)

    with pytest.raises(SymbolNotInAlphabet):
        make(target_char="z", target_string="zz", required_count=0)

    with pytest.raises(TargetStringSymbolNotInAlphabet):
        make(target_string="zz", required_count=0)


def test_errors_are_value_errors():
    for error in (
        EmptyAlphabet,
        MultiCharacterSymbol,
        SymbolNotInAlphabet,
        TargetStringSymbolNotInAlphabet,
        InvalidCount,
    ):
        assert issubclass(error, ConfigError)
        assert issubclass(error, ValueError)

    assert not issubclass(InvalidSymbol, ConfigError)
    assert InvalidSymbol("c").symbol == "c"
