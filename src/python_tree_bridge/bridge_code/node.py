"""
The node compiler turns one `MappingDeclaration` into its pair of conversion functions. For

    map("Literal", B_String, "value=value")

the A->B function is

    lambda node: B_String(start=derive_start(node), end=derive_end(node), value=node["value"])

and the B->A function is

    lambda node: {"type": "Literal", "value": node.value}

The B->A function is handed to the registration sink, which also attaches the span to the A record it returns.
"""
import ast
import logging
from copy import deepcopy
from dataclasses import dataclass
from typing import List

from python_tree_bridge.config import BridgeConfig
from python_tree_bridge.bridge_code.fields import compile_field
from python_tree_bridge.parse import ast_util
from python_tree_bridge.parse.declarations import MappingDeclaration

__all__ = ["CompiledNode", "NodeCompiler"]

logger = logging.getLogger(__name__)


@dataclass
class CompiledNode:
    declaration: MappingDeclaration
    a_to_b: ast.Lambda
    b_to_a: ast.Lambda
    register_b_to_a: str
    # Name of the registration sink

    @property
    def a_tag(self) -> str:
        return self.declaration.a_tag

    @property
    def b_ctor_name(self) -> str:
        return self.declaration.b_ctor_name

    def registration_statement(self, statement: ast.stmt) -> ast.Expr:
        """
        `register_B_to_A(BCtor, <B->A function>)`, the statement which replaces the declaration statement. It takes over
        the position of that statement.
        """
        return ast.Expr(
            value=ast_util.call(self.register_b_to_a, deepcopy(self.declaration.b_ctor), self.b_to_a),
            **ast_util.copy_ast_line_info(statement),
        )


class NodeCompiler:
    config: BridgeConfig

    def __init__(self, config: BridgeConfig) -> None:
        self.config = config

    def compile(self, declaration: MappingDeclaration) -> CompiledNode:
        """
        Build both conversion functions for a declaration. Span fields come first on the B side and the type tag comes
        first on the A side; after those, fields appear in mapping order.

        MalformedMapping and UnknownOperator from the mapping string propagate to the caller.
        """
        config = self.config
        param = ast_util.load(config.param_name)

        b_fields: List[ast.keyword] = [
            ast.keyword(arg="start", value=ast_util.call(config.derive_start, param)),
            ast.keyword(arg="end", value=ast_util.call(config.derive_end, param)),
        ]
        a_keys: List[ast.expr] = [ast.Constant(value=config.type_key)]
        a_values: List[ast.expr] = [ast.Constant(value=declaration.a_tag)]
        # B fields that can't be written as keyword arguments are passed through a ** dict
        b_extra_keys: List[ast.expr] = []
        b_extra_values: List[ast.expr] = []

        for mapping in declaration.field_mappings:
            compiled = compile_field(mapping, config)
            if ast_util.is_identifier(mapping.b_field):
                b_fields.append(ast.keyword(arg=mapping.b_field, value=compiled.a_to_b))
            else:
                b_extra_keys.append(ast.Constant(value=mapping.b_field))
                b_extra_values.append(compiled.a_to_b)
            a_keys.append(ast.Constant(value=mapping.a_field))
            a_values.append(compiled.b_to_a)

        if b_extra_keys:
            b_fields.append(ast.keyword(arg=None, value=ast.Dict(keys=b_extra_keys, values=b_extra_values)))

        construct_b = ast.Call(func=deepcopy(declaration.b_ctor), args=[], keywords=b_fields)
        build_a = ast.Dict(keys=a_keys, values=a_values)

        logger.debug(
            "Compiled %r <-> %s with %d field(s)", declaration.a_tag, declaration.b_ctor_name, len(a_keys) - 1
        )
        return CompiledNode(
            declaration,
            a_to_b=ast_util.lambda_of(config.param_name, construct_b),
            b_to_a=ast_util.lambda_of(config.param_name, build_a),
            register_b_to_a=config.register_b_to_a,
        )
