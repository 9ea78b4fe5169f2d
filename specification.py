from dataclasses import dataclass
from typing_extensions import *


class ConfigError(ValueError):
    """Base class for every reason a language description is rejected."""


class EmptyAlphabet(ConfigError):
    def __init__(self):
        super().__init__("Alphabet must contain at least one symbol")


class MultiCharacterSymbol(ConfigError):
    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(
            f"Alphabet symbol {symbol!r} must be exactly one character"
        )


class SymbolNotInAlphabet(ConfigError):
    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(f"Target symbol {symbol!r} is not in the alphabet")


class TargetStringSymbolNotInAlphabet(ConfigError):
    def __init__(self, symbol: str, target_string: str):
        self.symbol = symbol
        self.target_string = target_string
        super().__init__(
            f"Symbol {symbol!r} of target string {target_string!r} "
            f"is not in the alphabet"
        )


class InvalidCount(ConfigError):
    def __init__(self, count: Any):
        self.count = count
        super().__init__(
            f"Required count must be an integer >= 1, got {count!r}"
        )


class InvalidSymbol(ValueError):
    """Raised when a word being evaluated contains a symbol outside the alphabet."""

    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(f"Symbol {symbol!r} is not in the alphabet")


@dataclass(frozen=True)
class Specification:
    """
    Description of the language recognised by a SuffixCountAutomaton.

    A word belongs to the language when it ends with target_string and
    contains target_char exactly required_count times.

    alphabet:
        any iterable of one-character symbols (a plain string is split into
        its characters); stored as a de-duplicated tuple in first-seen order
    target_string:
        required trailing substring, may be empty
    target_char:
        the symbol whose occurrences are counted
    required_count:
        exact number of occurrences, an integer >= 1

    The description is validated on construction and raises the first
    ConfigError it finds (see validate).
    """

    alphabet: Tuple[str, ...]
    target_string: str
    target_char: str
    required_count: int

    def __post_init__(self):
        alphabet = self.alphabet
        if alphabet is None:
            alphabet = ()
        elif isinstance(alphabet, str):
            alphabet = list(alphabet)
        object.__setattr__(self, "alphabet", tuple(dict.fromkeys(alphabet)))
        if self.target_string is None:
            object.__setattr__(self, "target_string", "")

        validate(self)

    @property
    def suffix_length(self) -> int:
        return len(self.target_string)

    @property
    def overflow_count(self) -> int:
        return self.required_count + 1


def validate(spec: Specification) -> Specification:
    """
    Check a specification, stopping at the first violated constraint.

    Order of checks: empty alphabet, multi-character symbol, target symbol
    outside the alphabet, target string symbol outside the alphabet,
    invalid required count.
    """
    if not spec.alphabet:
        raise EmptyAlphabet()

    for symbol in spec.alphabet:
        if not isinstance(symbol, str) or len(symbol) != 1:
            raise MultiCharacterSymbol(symbol)

    symbols = set(spec.alphabet)

    if spec.target_char not in symbols:
        raise SymbolNotInAlphabet(spec.target_char)

    for char in spec.target_string:
        if char not in symbols:
            raise TargetStringSymbolNotInAlphabet(char, spec.target_string)

    count = spec.required_count
    if isinstance(count, bool) or not isinstance(count, int) or count < 1:
        raise InvalidCount(count)

    return spec
