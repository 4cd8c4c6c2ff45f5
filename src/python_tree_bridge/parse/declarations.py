"""
A mapping declaration is written in the declaration source as a call statement:

    map("WhileStatement", B_While, "test>condition, body%body")

This module recognizes such statements and lifts them into `MappingDeclaration` records. Nothing is compiled here.
"""
import ast
from dataclasses import dataclass
from typing import List
from typing import Optional

from typing_extensions import Self

from python_tree_bridge.errors import MalformedDeclaration
from python_tree_bridge.parse import ast_util
from python_tree_bridge.parse.mapping import FieldMapping
from python_tree_bridge.parse.mapping import parse_mapping

__all__ = ["MappingDeclaration", "is_declaration"]


def is_declaration(node: ast.AST, declaration_name: str) -> bool:
    """True for an expression statement which calls the declaration function by name"""
    return (
        isinstance(node, ast.Expr)
        and isinstance(node.value, ast.Call)
        and isinstance(node.value.func, ast.Name)
        and node.value.func.id == declaration_name
    )


@dataclass
class MappingDeclaration:
    a_tag: str
    # The Representation A type tag, e.g. "Program"
    b_ctor: ast.expr
    # Reference to the Representation B constructor, as written in the source (a name or a dotted name)
    mapping_spec: Optional[str]
    # The unparsed mapping string, None when the declaration has no field mappings
    lineno: int = 0
    col_offset: int = 0

    @property
    def b_ctor_name(self) -> str:
        return ast_util.dotted_name(self.b_ctor)

    @property
    def field_mappings(self) -> List[FieldMapping]:
        return parse_mapping(self.mapping_spec)

    @classmethod
    def from_statement(cls, node: ast.Expr, filename: Optional[str] = None) -> "Self":
        """
        Read the arguments of a declaration call. Raises MalformedDeclaration if they are not a tag string, a
        constructor reference and (optionally) a mapping string.
        """
        assert isinstance(node.value, ast.Call)
        decl_call = node.value

        def fail(message: str) -> MalformedDeclaration:
            return MalformedDeclaration(
                f"{message}: {ast_util.unparse(decl_call)}",
                filename=filename,
                lineno=node.lineno,
                col_offset=node.col_offset,
            )

        if decl_call.keywords:
            raise fail("Mapping declarations take positional arguments only")
        if not 2 <= len(decl_call.args) <= 3:
            raise fail(f"Expected 2 or 3 arguments, found {len(decl_call.args)}")

        a_tag, b_ctor, *rest = decl_call.args
        mapping = rest[0] if rest else None

        if not (isinstance(a_tag, ast.Constant) and isinstance(a_tag.value, str)):
            raise fail("The first argument must be a string literal naming the Representation A type")
        if not isinstance(b_ctor, (ast.Name, ast.Attribute)):
            raise fail("The second argument must name the Representation B constructor")
        try:
            ast_util.dotted_name(b_ctor)
        except ValueError:
            raise fail("The second argument must name the Representation B constructor") from None

        if mapping is None:
            mapping_spec = None
        elif isinstance(mapping, ast.Constant) and (mapping.value is None or isinstance(mapping.value, str)):
            mapping_spec = mapping.value
        else:
            raise fail("The third argument must be a mapping string")

        return cls(a_tag.value, b_ctor, mapping_spec, lineno=node.lineno, col_offset=node.col_offset)
