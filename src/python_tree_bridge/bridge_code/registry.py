import ast
import logging
from typing import Dict
from typing import Iterator
from typing import Optional
from typing import Tuple

from typing_extensions import Self

from python_tree_bridge.bridge_code.node import CompiledNode
from python_tree_bridge.errors import BridgeCompileError
from python_tree_bridge.errors import DuplicateTag
from python_tree_bridge.errors import MissingSeedTable
from python_tree_bridge.parse import ast_util

__all__ = ["DispatchRegistry", "find_seed_table"]

logger = logging.getLogger(__name__)


def find_seed_table(tree: ast.AST, seed_table: str) -> Optional[ast.Dict]:
    """Find the first assignment of a dict literal to the given name, e.g. `A_TO_B = {"NoBase": None}`"""
    for node in ast.walk(tree):
        if isinstance(node, ast.Assign):
            targets = node.targets
        elif isinstance(node, ast.AnnAssign) and node.value is not None:
            targets = [node.target]
        else:
            continue
        if isinstance(node.value, ast.Dict) and any(
            isinstance(t, ast.Name) and t.id == seed_table for t in targets
        ):
            return node.value
    return None


class DispatchRegistry:
    """
    The two dispatch tables filled in by a compile pass: A->B functions by A type tag, and B->A functions by B
    constructor name. Entries are only ever appended. Adding a key a second time is an error, never an override.

    The A tag table starts from the entries already written in the seed literal. Those entries are kept as they are
    and are never compiled, they just occupy their keys.
    """

    a_to_b: Dict[str, ast.expr]
    b_to_a: Dict[str, ast.expr]
    seed_size: int

    def __init__(self, seed: Optional[Dict[str, ast.expr]] = None) -> None:
        self.a_to_b = dict(seed or {})
        self.b_to_a = {}
        self.seed_size = len(self.a_to_b)

    @classmethod
    def from_seed(cls, seed_literal: ast.Dict) -> "Self":
        seed: Dict[str, ast.expr] = {}
        for key, value in zip(seed_literal.keys, seed_literal.values):
            if not (isinstance(key, ast.Constant) and isinstance(key.value, str)):
                # A `**spread` (key is None) or a computed key can't be checked for duplicates
                raise BridgeCompileError(
                    f"The seed table may only hold string literal keys: {ast_util.unparse(seed_literal)}",
                    lineno=seed_literal.lineno,
                )
            seed[key.value] = value
        return cls(seed)

    @classmethod
    def locate(cls, tree: ast.AST, seed_table: str, filename: Optional[str] = None) -> Tuple["Self", ast.Dict]:
        """Find the seed literal in the tree and start a registry from it. Raises MissingSeedTable if there is none"""
        seed_literal = find_seed_table(tree, seed_table)
        if seed_literal is None:
            raise MissingSeedTable(seed_table, filename=filename)
        return cls.from_seed(seed_literal), seed_literal

    def add(self, compiled: CompiledNode) -> None:
        """Append one entry to each table. Raises DuplicateTag (and adds nothing) if either key is taken"""
        if compiled.a_tag in self.a_to_b:
            raise DuplicateTag("A tag", compiled.a_tag)
        if compiled.b_ctor_name in self.b_to_a:
            raise DuplicateTag("B constructor", compiled.b_ctor_name)
        self.a_to_b[compiled.a_tag] = compiled.a_to_b
        self.b_to_a[compiled.b_ctor_name] = compiled.b_to_a

    def lookup(self, a_tag: str) -> ast.expr:
        """The A->B function registered for a tag. Raises KeyError for unknown tags"""
        return self.a_to_b[a_tag]

    def lookup_b(self, b_ctor_name: str) -> ast.expr:
        return self.b_to_a[b_ctor_name]

    def __len__(self) -> int:
        return len(self.a_to_b)

    def __contains__(self, a_tag: object) -> bool:
        return a_tag in self.a_to_b

    def __iter__(self) -> Iterator[str]:
        return iter(self.a_to_b)

    def write_seed(self, seed_literal: ast.Dict) -> None:
        """Append every compiled A->B entry to the seed literal, after the entries it already had"""
        for a_tag, a_to_b in list(self.a_to_b.items())[self.seed_size :]:
            seed_literal.keys.append(ast.Constant(value=a_tag))
            seed_literal.values.append(a_to_b)
        logger.debug("Wrote %d entries into the seed table", len(self.a_to_b) - self.seed_size)
