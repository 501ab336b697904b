"""Small string helpers used when reading user-supplied options.

Each helper takes a keyed argument bundle (mapping or flat key/value
list) and applies its argument contract before doing any work.
"""

from __future__ import annotations

import re
from typing import Any

from fba_schema.contracts import ArgumentContract

NONE_SENTINEL = "none"

_EC_NUMBER = re.compile(r"[\d\-]+\.[\d\-]+\.[\d\-]+\.[\d\-]+")
_WHITESPACE = re.compile(r"\s")
_COMMENT = re.compile(r"#.*$")

PARSE_ARRAY_STRING = ArgumentContract(
    "parse_array_string",
    optional={"string": NONE_SENTINEL, "delimiter": "|"},
)

TRANSLATE_ARRAY_OPTIONS = ArgumentContract(
    "translate_array_options",
    mandatory=("option",),
    optional={"delimiter": "|"},
)


def _split(value: str, delimiter: str) -> list[str]:
    """Split on a literal delimiter, dropping trailing empty fields."""
    parts = value.split(delimiter)
    while parts and parts[-1] == "":
        parts.pop()
    return parts


def parse_array_string(*args: Any, **kwargs: Any) -> list[str]:
    """Split a delimited string into a list.

    Arguments:
        string: The delimited string; the sentinel "none" yields []
        delimiter: Field delimiter (default "|")

    Example:
        >>> parse_array_string(string="a|b|c")
        ['a', 'b', 'c']
    """
    arguments = PARSE_ARRAY_STRING.bind(*args, **kwargs)
    string = str(arguments["string"])
    if string == NONE_SENTINEL:
        return []
    return _split(string, str(arguments["delimiter"]))


def translate_array_options(*args: Any, **kwargs: Any) -> list[str]:
    """Split an option given as a delimited string or a list of them.

    Arguments:
        option: A string, or a list of strings each split in turn
        delimiter: Field delimiter (default "|")

    Example:
        >>> translate_array_options(option=["a|b", "c"])
        ['a', 'b', 'c']
    """
    arguments = TRANSLATE_ARRAY_OPTIONS.bind(*args, **kwargs)
    option = arguments["option"]
    delimiter = str(arguments["delimiter"])

    if isinstance(option, (list, tuple)):
        output: list[str] = []
        for item in option:
            output.extend(_split(str(item), delimiter))
        return output
    return _split(str(option), delimiter)


def convert_role_to_search_role(role: str) -> str:
    """Normalize a functional role name for matching.

    Lower-cases the name and strips EC numbers, all whitespace and any
    trailing "#" comment.

    Example:
        >>> convert_role_to_search_role("Pyruvate kinase (EC 2.7.1.40) # note")
        'pyruvatekinase(ec)'
    """
    search_role = role.lower()
    search_role = _EC_NUMBER.sub("", search_role)
    search_role = _WHITESPACE.sub("", search_role)
    return _COMMENT.sub("", search_role)
