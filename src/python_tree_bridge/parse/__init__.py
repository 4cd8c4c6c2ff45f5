"""
In this subpackage, we read the declaration source. The source is parsed into a standard AST (with comments kept, so
that they can be written back out) and the mapping declarations found in it are lifted into `MappingDeclaration`
records, each with its parsed list of `FieldMapping`s.

Nothing here generates code. That is the job of the `bridge_code` subpackage.
"""

from .ast_util import parse, unparse
from .declarations import MappingDeclaration
from .mapping import FieldMapping, FieldMode, parse_mapping

__all__ = ["parse", "unparse", "MappingDeclaration", "FieldMapping", "FieldMode", "parse_mapping"]
