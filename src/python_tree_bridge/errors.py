"""
Every failure raised while compiling a declaration source is a `BridgeCompileError`. None of them are recoverable:
the input is static source text, so the pass stops at the first one and no output is produced.
"""
from typing import Optional

__all__ = [
    "BridgeCompileError",
    "MalformedMapping",
    "UnknownOperator",
    "MissingSeedTable",
    "DuplicateTag",
    "MalformedDeclaration",
]


class BridgeCompileError(Exception):
    def __init__(
        self,
        message: str,
        filename: Optional[str] = None,
        lineno: Optional[int] = None,
        col_offset: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.filename = filename
        self.lineno = lineno
        self.col_offset = col_offset

    def located(
        self, filename: Optional[str], lineno: Optional[int], col_offset: Optional[int] = None
    ) -> "BridgeCompileError":
        """Fill in location details that were not known where the error was raised. Returns self"""
        if self.filename is None:
            self.filename = filename
        if self.lineno is None:
            self.lineno = lineno
        if self.col_offset is None:
            self.col_offset = col_offset
        return self

    def __str__(self) -> str:
        location = [str(part) for part in (self.filename, self.lineno, self.col_offset) if part is not None]
        if location:
            return ":".join(location) + ": " + self.message
        return self.message


class MalformedMapping(BridgeCompileError):
    """A mapping string contains a token that is not of the form `<ident><op><ident>`"""

    def __init__(self, message: str, mapping_spec: str, column: int) -> None:
        super().__init__(f"{message} (column {column} of mapping {mapping_spec!r})")
        self.mapping_spec = mapping_spec
        self.column = column


class UnknownOperator(BridgeCompileError):
    """A field operator outside of '=', '>', '@' and '%' reached mode resolution"""

    def __init__(self, operator: str) -> None:
        super().__init__(f"Can't understand operator in field mapping: {operator!r}")
        self.operator = operator


class MissingSeedTable(BridgeCompileError):
    def __init__(self, seed_table: str, filename: Optional[str] = None) -> None:
        super().__init__(
            f"Could not find the dispatch table seed: expected an assignment of a dict literal to '{seed_table}'",
            filename=filename,
        )
        self.seed_table = seed_table


class DuplicateTag(BridgeCompileError):
    def __init__(self, table: str, key: str) -> None:
        super().__init__(f"'{key}' is already registered in the {table} table")
        self.table = table
        self.key = key


class MalformedDeclaration(BridgeCompileError):
    """A declaration call does not have the shape `map("Tag", Constructor, "mapping")`"""
