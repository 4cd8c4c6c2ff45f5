"""
In this module, we figure out how to carry a single field across. Each field mapping compiles into two expressions:
one which reads the field from a Representation A record (the value for the B node) and one which reads it back
from a B node (the value for the A record). Both read from the conversion function's single parameter.
"""
import ast
from typing import NamedTuple

from typing_extensions import assert_never

from python_tree_bridge.config import BridgeConfig
from python_tree_bridge.parse import ast_util
from python_tree_bridge.parse.mapping import FieldMapping
from python_tree_bridge.parse.mapping import FieldMode

__all__ = ["CompiledField", "compile_field"]


class CompiledField(NamedTuple):
    a_to_b: ast.expr
    b_to_a: ast.expr


def compile_field(mapping: FieldMapping, config: BridgeConfig) -> CompiledField:
    """
    Build the pair of value expressions for one field, e.g. for `body@body`:

      A->B:  from_A_list(node["body"])
      B->A:  to_A_list(node.body)

    Block bodies are the one mode where the two directions are not mirror images. Going to B, the converted block is
    unwrapped and only its statement list is kept. Going back, those statements are wrapped in a brand new block.
    """
    a_value = ast_util.item(ast_util.load(config.param_name), mapping.a_field)
    b_value = ast_util.attribute(ast_util.load(config.param_name), mapping.b_field)

    mode = mapping.mode
    if mode is FieldMode.DIRECT:
        return CompiledField(a_value, b_value)
    elif mode is FieldMode.RECURSIVE:
        return CompiledField(ast_util.call(config.from_a, a_value), ast_util.call(config.to_a, b_value))
    elif mode is FieldMode.MAPPED_LIST:
        return CompiledField(ast_util.call(config.from_a_list, a_value), ast_util.call(config.to_a_list, b_value))
    elif mode is FieldMode.BLOCK_BODY:
        return CompiledField(
            ast_util.call(config.unwrap_block, ast_util.call(config.from_a, a_value)),
            ast_util.call(config.rewrap_block, b_value),
        )
    else:
        assert_never(mode)
