import os
import re
from typing_extensions import *

from specification import InvalidCount, Specification

KEY_ALIASES = {
    "alphabet": "alphabet",
    "sigma": "alphabet",
    "target_string": "target_string",
    "suffix": "target_string",
    "target": "target_string",
    "target_char": "target_char",
    "symbol": "target_char",
    "char": "target_char",
    "required_count": "required_count",
    "count": "required_count",
}

EPSILON_WORDS = ["eps", "epsilon", "ε"]

# "NAME:" on its own line starts a named section, unless NAME is a field key
# (an empty "suffix:" line must stay a field).
NAME_PATTERN = re.compile(
    r"^(?!(?i:%s)\s*:)([A-Za-z]\w*):\s*$" % "|".join(KEY_ALIASES),
    re.MULTILINE,
)


def parse_alphabet(value: str) -> List[str]:
    symbols = [s for s in re.split(r"[\s,]+", value.strip()) if s]
    # "alphabet: abc" is shorthand for "alphabet: a b c"
    if len(symbols) == 1 and len(symbols[0]) > 1:
        return list(symbols[0])
    return symbols


def parse_word(value: str) -> str:
    """'eps', 'epsilon' and 'ε' stand for the empty word."""
    return "" if value.lower() in EPSILON_WORDS else value


def parse_count(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise InvalidCount(value) from None


def parse_specification(block: str) -> Specification:
    """
    Parse one language description.

    Format (one field per line, '#' starts a comment line):
        alphabet: a b
        target_string: ab
        target_char: a
        required_count: 2
    """
    fields: Dict[str, str] = {}

    for line in block.strip().split("\n"):
        line = line.strip()

        if not line or line.startswith("#"):
            continue

        if ":" not in line:
            raise ValueError(f"Expected 'key: value', got {line!r}")

        key, value = line.split(":", 1)
        key = key.strip().lower()
        if key not in KEY_ALIASES:
            raise ValueError(f"Unknown field {key!r}")
        fields[KEY_ALIASES[key]] = value.strip()

    for required in ("alphabet", "target_char", "required_count"):
        if required not in fields:
            raise ValueError(f"Missing field {required!r}")

    return Specification(
        alphabet=tuple(parse_alphabet(fields["alphabet"])),
        target_string=parse_word(fields.get("target_string", "")),
        target_char=fields["target_char"],
        required_count=parse_count(fields["required_count"]),
    )


def parse_specifications(content: str, base_name: str = "language") -> Dict[str, Specification]:
    """
    Parse every language description in content.

    Descriptions are either named sections ("NAME:" on its own line) or
    blocks separated by '---'. Blocks that fail to parse are reported and
    skipped.
    """
    specs: Dict[str, Specification] = {}

    if NAME_PATTERN.search(content):
        sections = NAME_PATTERN.split(content)

        for i in range(1, len(sections), 2):
            if i + 1 >= len(sections):
                continue

            name = sections[i].strip()
            definition = sections[i + 1].strip()

            if not definition:
                continue

            try:
                specs[name] = parse_specification(definition)
            except ValueError as e:
                print(f"Warning: Failed to load language '{name}': {e}")
    else:
        blocks = [block for block in content.split("---") if block.strip()]
        for idx, block in enumerate(blocks):
            key = f"{base_name}{idx if idx > 0 else ''}"
            try:
                specs[key] = parse_specification(block)
            except ValueError as e:
                print(f"Warning: Failed to load language '{key}': {e}")

    return specs


def load_from_file(filename: str) -> Dict[str, Specification]:
    with open(filename, "r", encoding="utf-8") as f:
        content = f.read()

    base_name = os.path.basename(filename).rsplit(".", 1)[0]
    return parse_specifications(content, base_name)
