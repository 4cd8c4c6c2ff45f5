"""
Bridge code is the pair of conversion functions generated for each mapping declaration. The two functions are built
independently, one expression at a time, but must stay inverses of each other:

1. `fields` compiles one field mapping into an A->B value expression and a B->A value expression

2. `node` assembles those expressions (plus the span and type boilerplate) into the two conversion functions for a
   declaration

3. `registry` accumulates the compiled functions into the two dispatch tables over a whole pass

Compiling one declaration never looks at another declaration's output. The generated functions only look each other
up when they run, by which time the dispatch tables are complete.
"""
from .fields import CompiledField, compile_field  # noreorder
from .node import CompiledNode, NodeCompiler
from .registry import DispatchRegistry

__all__ = ["CompiledField", "compile_field", "CompiledNode", "NodeCompiler", "DispatchRegistry"]
