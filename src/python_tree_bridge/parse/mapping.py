"""
The mapping mini-language. A mapping string is a comma separated list of field mappings, each written as
`<A field><operator><B field>`, e.g. `"test>condition, body%body"`.

Parsing happens in two steps: a tokenizer which turns the string into located tokens and a one-pass parser which
checks the grammar `mapping := field (',' field)*` and `field := IDENT OP IDENT` (the three tokens of a field are
written without whitespace between them).
"""
import enum
import string
from dataclasses import dataclass
from typing import Iterator
from typing import List
from typing import Optional

from more_itertools import peekable
from typing_extensions import Self

from python_tree_bridge.errors import MalformedMapping
from python_tree_bridge.errors import UnknownOperator

__all__ = ["FieldMode", "FieldMapping", "Token", "TokenKind", "tokenize", "parse_mapping"]

IDENT_CHARS = frozenset(string.ascii_letters + string.digits + "$_")


class FieldMode(enum.Enum):
    """How a field is carried across the two representations. The value is the operator used in mapping strings"""

    DIRECT = "="
    RECURSIVE = ">"
    MAPPED_LIST = "@"
    BLOCK_BODY = "%"

    @classmethod
    def from_operator(cls, operator: str) -> "Self":
        try:
            return cls(operator)
        except ValueError:
            raise UnknownOperator(operator) from None


OPERATOR_CHARS = frozenset(mode.value for mode in FieldMode)


@dataclass(frozen=True)
class FieldMapping:
    a_field: str
    b_field: str
    mode: FieldMode
    column: int = 0
    # Position of the A field within the mapping string


class TokenKind(enum.Enum):
    IDENT = "identifier"
    OP = "operator"
    COMMA = "comma"
    UNKNOWN = "unrecognized character"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    column: int
    spaced: bool
    # True when whitespace came right before this token

    @property
    def end(self) -> int:
        return self.column + len(self.text)


def tokenize(mapping_spec: str) -> Iterator[Token]:
    """Split a mapping string into tokens. Whitespace is dropped, but noted on the token that follows it"""
    chars = peekable(enumerate(mapping_spec))
    spaced = False
    for column, char in chars:
        if char.isspace():
            spaced = True
            continue

        if char in IDENT_CHARS:
            text = char
            while chars and chars.peek()[1] in IDENT_CHARS:
                text += next(chars)[1]
            yield Token(TokenKind.IDENT, text, column, spaced)
        elif char in OPERATOR_CHARS:
            yield Token(TokenKind.OP, char, column, spaced)
        elif char == ",":
            yield Token(TokenKind.COMMA, char, column, spaced)
        else:
            yield Token(TokenKind.UNKNOWN, char, column, spaced)
        spaced = False


def parse_mapping(mapping_spec: Optional[str]) -> List[FieldMapping]:
    """
    Parse a mapping string into field mappings, in the order they were written. A missing (or blank) mapping string
    gives an empty list: only the span and type fields will be generated for that node type.

    Raises MalformedMapping, naming the column of the first token that does not fit.
    """
    if mapping_spec is None or not mapping_spec.strip():
        return []

    tokens = peekable(tokenize(mapping_spec))
    result: List[FieldMapping] = []

    def fail(message: str, column: int) -> MalformedMapping:
        return MalformedMapping(f"Can't understand property map: {message}", mapping_spec, column)

    def expect(kind: TokenKind, after: Optional[Token]) -> Token:
        token = tokens.peek(None)
        if token is None:
            raise fail(f"expected {kind.value} but the mapping ended", len(mapping_spec))
        if token.kind is not kind:
            raise fail(f"expected {kind.value}, found {token.text!r}", token.column)
        if after is not None and (token.spaced or token.column != after.end):
            raise fail(f"whitespace is not allowed inside a field mapping, before {token.text!r}", token.column)
        return next(tokens)

    while True:
        a_field = expect(TokenKind.IDENT, None)
        operator = expect(TokenKind.OP, a_field)
        b_field = expect(TokenKind.IDENT, operator)
        result.append(FieldMapping(a_field.text, b_field.text, FieldMode.from_operator(operator.text), a_field.column))

        separator = next(tokens, None)
        if separator is None:
            return result
        if separator.kind is not TokenKind.COMMA:
            raise fail(f"expected ',' between field mappings, found {separator.text!r}", separator.column)
