import ast
import re

import pytest

from python_tree_bridge.errors import MalformedDeclaration
from python_tree_bridge.parse import parse
from python_tree_bridge.parse.declarations import is_declaration
from python_tree_bridge.parse.declarations import MappingDeclaration
from python_tree_bridge.parse.mapping import FieldMode


def first_statement(source: str) -> ast.Expr:
    stmt = parse(source).body[0]
    assert isinstance(stmt, ast.Expr)
    return stmt


def test_simple_declaration() -> None:
    declaration = MappingDeclaration.from_statement(first_statement('map("Program", B_Toplevel, "body@body")'))
    assert declaration.a_tag == "Program"
    assert declaration.b_ctor_name == "B_Toplevel"
    assert declaration.mapping_spec == "body@body"
    assert declaration.lineno == 1
    assert [m.mode for m in declaration.field_mappings] == [FieldMode.MAPPED_LIST]


@pytest.mark.parametrize("source", ['map("EmptyStatement", B_EmptyStatement)', 'map("Debugger", B_Debugger, None)'])
def test_no_mapping_string(source) -> None:
    declaration = MappingDeclaration.from_statement(first_statement(source))
    assert declaration.mapping_spec is None
    assert declaration.field_mappings == []


def test_dotted_constructor() -> None:
    declaration = MappingDeclaration.from_statement(first_statement('map("Literal", nodes.strings.B_String, "value=value")'))
    assert declaration.b_ctor_name == "nodes.strings.B_String"


@pytest.mark.parametrize(
    ("source", "expected_message"),
    [
        ('map("Program")', "Expected 2 or 3 arguments, found 1"),
        ('map("Program", B_Toplevel, "body@body", 4)', "Expected 2 or 3 arguments, found 4"),
        ('map(Program, B_Toplevel, "body@body")', "The first argument must be a string literal"),
        ('map("Program", "B_Toplevel", "body@body")', "The second argument must name the Representation B constructor"),
        ('map("Program", make()(), "body@body")', "The second argument must name the Representation B constructor"),
        ('map("Program", B_Toplevel, ["body@body"])', "The third argument must be a mapping string"),
        ('map("Program", B_Toplevel, mapping="body@body")', "Mapping declarations take positional arguments only"),
        ('map(*args)', "Expected 2 or 3 arguments, found 1"),
    ],
)
def test_malformed_declaration(source, expected_message) -> None:
    with pytest.raises(MalformedDeclaration, match=re.escape(expected_message)) as exc_info:
        MappingDeclaration.from_statement(first_statement(source), "decls.py")
    assert exc_info.value.filename == "decls.py"
    assert exc_info.value.lineno == 1


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ('map("Program", B_Toplevel)', True),
        ('other("Program", B_Toplevel)', False),
        ('x = map("Program", B_Toplevel)', False),
        ('builtins.map("Program", B_Toplevel)', False),
        ("map", False),
    ],
)
def test_is_declaration(source, expected) -> None:
    assert is_declaration(parse(source).body[0], "map") is expected
