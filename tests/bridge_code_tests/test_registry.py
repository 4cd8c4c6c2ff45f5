import ast

import pytest

from python_tree_bridge.bridge_code.node import CompiledNode
from python_tree_bridge.bridge_code.node import NodeCompiler
from python_tree_bridge.bridge_code.registry import DispatchRegistry
from python_tree_bridge.bridge_code.registry import find_seed_table
from python_tree_bridge.config import BridgeConfig
from python_tree_bridge.errors import BridgeCompileError
from python_tree_bridge.errors import DuplicateTag
from python_tree_bridge.errors import MissingSeedTable
from python_tree_bridge.parse import parse
from python_tree_bridge.parse import unparse
from python_tree_bridge.parse.declarations import MappingDeclaration


def compiled_node(a_tag: str, b_ctor: str, mapping: str = "value=value") -> CompiledNode:
    stmt = parse(f"map({a_tag!r}, {b_ctor}, {mapping!r})").body[0]
    assert isinstance(stmt, ast.Expr)
    return NodeCompiler(BridgeConfig()).compile(MappingDeclaration.from_statement(stmt))


@pytest.fixture
def seeded() -> DispatchRegistry:
    seed_literal = parse('A_TO_B = {"NoBase": None}').body[0].value
    return DispatchRegistry.from_seed(seed_literal)


@pytest.mark.parametrize("count", [0, 1, 5])
def test_registry_growth(seeded: DispatchRegistry, count: int) -> None:
    """The seed entry plus one entry per declaration"""
    for i in range(count):
        seeded.add(compiled_node(f"Tag{i}", f"B_Tag{i}"))
    assert len(seeded) == count + 1
    assert len(seeded.b_to_a) == count
    assert list(seeded) == ["NoBase"] + [f"Tag{i}" for i in range(count)]


def test_lookup(seeded: DispatchRegistry) -> None:
    compiled = compiled_node("Literal", "B_String")
    seeded.add(compiled)
    assert "Literal" in seeded
    assert seeded.lookup("Literal") is compiled.a_to_b
    assert seeded.lookup_b("B_String") is compiled.b_to_a
    with pytest.raises(KeyError):
        seeded.lookup("Identifier")


def test_duplicate_a_tag(seeded: DispatchRegistry) -> None:
    first = compiled_node("Literal", "B_String")
    seeded.add(first)
    with pytest.raises(DuplicateTag, match="'Literal' is already registered in the A tag table"):
        seeded.add(compiled_node("Literal", "B_Number"))
    # Nothing was overwritten or added
    assert seeded.lookup("Literal") is first.a_to_b
    assert "B_Number" not in seeded.b_to_a


def test_duplicate_seed_tag(seeded: DispatchRegistry) -> None:
    with pytest.raises(DuplicateTag):
        seeded.add(compiled_node("NoBase", "B_Node"))


def test_duplicate_b_constructor(seeded: DispatchRegistry) -> None:
    seeded.add(compiled_node("Literal", "B_String"))
    with pytest.raises(DuplicateTag, match="'B_String' is already registered in the B constructor table"):
        seeded.add(compiled_node("TemplateElement", "B_String"))
    assert "TemplateElement" not in seeded


def test_write_seed() -> None:
    tree = parse('A_TO_B = {"NoBase": None}')
    registry, seed_literal = DispatchRegistry.locate(tree, "A_TO_B")
    registry.add(compiled_node("Literal", "B_String"))
    assert unparse(tree) == "A_TO_B = {'NoBase': None}", "The seed literal is untouched until write_seed()"

    registry.write_seed(seed_literal)
    assert unparse(tree) == (
        "A_TO_B = {'NoBase': None, 'Literal': lambda node: B_String(start=derive_start(node), end=derive_end(node), "
        "value=node['value'])}"
    )


@pytest.mark.parametrize(
    ("source", "found"),
    [
        ('A_TO_B = {"NoBase": None}', True),
        ('A_TO_B: dict = {"NoBase": None}', True),
        ('if True:\n    A_TO_B = {"NoBase": None}', True),
        ("A_TO_B = dict()", False),
        ('OTHER = {"NoBase": None}', False),
        ("A_TO_B: dict", False),
    ],
)
def test_find_seed_table(source, found) -> None:
    assert (find_seed_table(parse(source), "A_TO_B") is not None) is found


def test_missing_seed_table() -> None:
    with pytest.raises(MissingSeedTable) as exc_info:
        DispatchRegistry.locate(parse("x = 1"), "A_TO_B", "decls.py")
    assert exc_info.value.filename == "decls.py"
    assert "'A_TO_B'" in str(exc_info.value)


def test_seed_with_computed_key() -> None:
    with pytest.raises(BridgeCompileError, match="string literal keys"):
        DispatchRegistry.locate(parse("A_TO_B = {**OTHER}"), "A_TO_B")
