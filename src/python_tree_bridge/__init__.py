from ._version import version as __version__

__all__ = [
    "__version__",
    "BridgeConfig",
    "BridgeCompileError",
    "DeclarationSource",
    "DuplicateTag",
    "MalformedDeclaration",
    "MalformedMapping",
    "MissingSeedTable",
    "UnknownOperator",
    "compile_file",
    "compile_source",
]

from .config import BridgeConfig
from .driver import (
    DeclarationSource,
    compile_file,
    compile_source,
)
from .errors import (
    BridgeCompileError,
    DuplicateTag,
    MalformedDeclaration,
    MalformedMapping,
    MissingSeedTable,
    UnknownOperator,
)
