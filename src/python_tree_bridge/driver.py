"""
The driver runs one compile pass over a declaration source: every mapping declaration is compiled and replaced by its
registration statement, and every A->B function is appended to the seed table literal. The rewritten source is
returned as text.

A pass either completes or raises. The first error aborts it and no output is produced.

Comments on their own line keep their place. A trailing comment inside a multi-line declaration call may end up on
another statement (such as the seed table assignment), since the declaration it sat in is replaced.
"""
import ast
import inspect
import logging
from copy import deepcopy
from pathlib import Path
from types import ModuleType
from typing import Iterable
from typing import List
from typing import Optional
from typing import Union

from python_tree_bridge.bridge_code import DispatchRegistry
from python_tree_bridge.bridge_code import NodeCompiler
from python_tree_bridge.config import BridgeConfig
from python_tree_bridge.errors import BridgeCompileError
from python_tree_bridge.parse import ast_util
from python_tree_bridge.parse.declarations import is_declaration
from python_tree_bridge.parse.declarations import MappingDeclaration
from python_tree_bridge.util import not_optional

__all__ = ["DeclarationSource", "BridgeWriter", "compile_source", "compile_file"]

logger = logging.getLogger(__name__)


class BridgeWriter(ast.NodeTransformer):
    """
    Replaces each declaration statement with its registration statement, collecting the compiled functions into the
    registry as it goes. The registry is passed in and owned by the caller.
    """

    def __init__(
        self, registry: DispatchRegistry, compiler: NodeCompiler, filename: Optional[str] = None
    ) -> None:
        self.registry = registry
        self.compiler = compiler
        self.filename = filename
        self.declaration_count = 0

    def visit_Expr(self, node: ast.Expr) -> ast.AST:
        if not is_declaration(node, self.compiler.config.declaration_name):
            return self.generic_visit(node)

        try:
            declaration = MappingDeclaration.from_statement(node, self.filename)
            compiled = self.compiler.compile(declaration)
            self.registry.add(compiled)
        except BridgeCompileError as e:
            e.located(self.filename, node.lineno, node.col_offset)
            raise

        self.declaration_count += 1
        return compiled.registration_statement(node)


class DeclarationSource:
    """
    Holds a declaration source and its parsed tree. Keeps track of the file (and module) the source came from so that
    errors can point back at it.
    """

    name: str

    filename: Optional[str] = None
    """The filename, if applicable. This will be None if the source was a raw string"""

    module: Optional[ModuleType] = None
    """The module the source was read from, or None"""

    source_code: str
    """The full, original source text"""

    source_ast: ast.Module
    """The original source, parsed with comments kept. Compiling never modifies this tree"""

    def __init__(
        self, name: str, code: Union[str, Path, ModuleType, Iterable[str]], filename: Optional[str] = None
    ) -> None:
        self.name = name
        self.filename = filename

        if isinstance(code, str):
            self.source_code = code
        elif isinstance(code, Path):
            self.filename = str(code)
            self.source_code = code.read_text(encoding="utf-8")
        elif isinstance(code, ModuleType):
            self.module = code
            self.filename = not_optional(inspect.getsourcefile(code))
            self.source_code = inspect.getsource(code)
        else:
            self.source_code = "\n".join(code)

        self.source_ast = ast_util.parse(self.source_code, self.filename or "<unknown>")

    def find_declarations(self, config: Optional[BridgeConfig] = None) -> List[MappingDeclaration]:
        """Every declaration in the source, in source order, without compiling any of them"""
        declaration_name = (config or BridgeConfig()).declaration_name
        found = [node for node in ast.walk(self.source_ast) if is_declaration(node, declaration_name)]
        found.sort(key=lambda node: (node.lineno, node.col_offset))
        return [MappingDeclaration.from_statement(node, self.filename) for node in found]

    def compile(self, config: Optional[BridgeConfig] = None) -> str:
        """
        Run a compile pass and return the rewritten source. Each call starts from a fresh copy of the tree, with a new
        registry seeded from the seed literal.

        Raises MissingSeedTable before any declaration is looked at, and any other BridgeCompileError from the first
        declaration that fails.
        """
        config = config or BridgeConfig()
        tree = deepcopy(self.source_ast)

        registry, seed_literal = DispatchRegistry.locate(tree, config.seed_table, self.filename)
        writer = BridgeWriter(registry, NodeCompiler(config), self.filename)
        tree = writer.visit(tree)
        # Only now, with every declaration compiled, does the seed literal change
        registry.write_seed(seed_literal)

        logger.info(
            "Compiled %d declaration(s) from %s, %d entries in %s",
            writer.declaration_count,
            self.filename or self.name,
            len(registry),
            config.seed_table,
        )
        return ast_util.unparse(ast.fix_missing_locations(tree))


def compile_source(source: str, filename: Optional[str] = None, config: Optional[BridgeConfig] = None) -> str:
    return DeclarationSource(filename or "<string>", source, filename=filename).compile(config)


def compile_file(path: Union[str, Path], config: Optional[BridgeConfig] = None) -> str:
    path = Path(path)
    return DeclarationSource(path.name, path).compile(config)
