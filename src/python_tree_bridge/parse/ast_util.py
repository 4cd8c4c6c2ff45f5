import ast
import keyword
from typing import Any
from typing import Mapping
from typing import Union

import ast_comments  # type: ignore
from typing_extensions import cast


def parse(source: Union[str, bytes], filename: str = "<unknown>") -> ast.Module:
    """
    Replace the ast.parse method with one which picks up comments. Comments become `ast_comments.Comment` statements
    so that they survive the trip back to source text through `unparse()`.
    """
    return cast(ast.Module, ast_comments.parse(source, filename, "exec"))


def unparse(ast_obj: ast.AST) -> str:
    return cast(str, ast_comments.unparse(ast_obj))


def copy_ast_line_info(node: ast.AST) -> Mapping[str, Any]:
    """Extract the line and position attributes from a node so they can initialize a new node"""
    return dict(
        lineno=node.lineno,
        col_offset=node.col_offset,
        end_lineno=node.end_lineno,
        end_col_offset=node.end_col_offset,
    )


def is_identifier(name: str) -> bool:
    """True if the name can be written as a bare Python name (attribute, keyword argument, etc)"""
    return name.isidentifier() and not keyword.iskeyword(name)


def dotted_name(node: ast.AST) -> str:
    """
    Source text for a name or a chain of attribute accesses on a name, e.g. `B_Toplevel` or `nodes.B_Toplevel`.
    Raises ValueError for anything else.
    """
    if isinstance(node, ast.Name):
        return node.id
    elif isinstance(node, ast.Attribute):
        return f"{dotted_name(node.value)}.{node.attr}"
    raise ValueError(f"Expected a name or a dotted name, found: {unparse(node)}")


def load(name: str) -> ast.Name:
    return ast.Name(id=name, ctx=ast.Load())


def call(func: Union[str, ast.expr], *args: ast.expr, **kwargs: ast.expr) -> ast.Call:
    """Build `func(*args, **kwargs)` where `func` may be given as a plain name"""
    return ast.Call(
        func=load(func) if isinstance(func, str) else func,
        args=list(args),
        keywords=[ast.keyword(arg=name, value=value) for name, value in kwargs.items()],
    )


def item(record: ast.expr, key: str) -> ast.Subscript:
    """`record["key"]`, for reading a field of a plain record"""
    return ast.Subscript(value=record, slice=ast.Constant(value=key), ctx=ast.Load())


def attribute(obj: ast.expr, name: str) -> ast.expr:
    """`obj.name`, or `getattr(obj, "name")` when the name can't be written as an attribute (e.g. `$name`)"""
    if is_identifier(name):
        return ast.Attribute(value=obj, attr=name, ctx=ast.Load())
    return call("getattr", obj, ast.Constant(value=name))


def lambda_of(param_name: str, body: ast.expr) -> ast.Lambda:
    """`lambda param_name: body`"""
    return ast.Lambda(
        args=ast.arguments(
            posonlyargs=[],
            args=[ast.arg(arg=param_name)],
            vararg=None,
            kwonlyargs=[],
            kw_defaults=[],
            kwarg=None,
            defaults=[],
        ),
        body=body,
    )
