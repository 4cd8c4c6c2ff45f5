from dataclasses import dataclass

__all__ = ["BridgeConfig"]


@dataclass(frozen=True)
class BridgeConfig:
    """
    Names that connect the compiler to the declaration source and to the runtime that will later execute the
    generated code. The defaults follow the conventional layout:

    >>> A_TO_B = {"NoBase": None}
    >>> map("Program", B_Toplevel, "body@body")
    """

    seed_table: str = "A_TO_B"
    """The name assigned to the dict literal which receives one A->B entry per declaration"""

    declaration_name: str = "map"
    """Calls to this name, written as statements, are treated as mapping declarations"""

    param_name: str = "node"
    """Parameter name of every generated conversion function"""

    type_key: str = "type"
    """The discriminant key of Representation A records"""

    from_a: str = "from_A"
    to_a: str = "to_A"
    from_a_list: str = "from_A_list"
    to_a_list: str = "to_A_list"
    unwrap_block: str = "unwrap_block"
    rewrap_block: str = "rewrap_block"
    derive_start: str = "derive_start"
    derive_end: str = "derive_end"

    register_b_to_a: str = "register_B_to_A"
    """The registration sink. Called once per declaration with the B constructor and the B->A function"""
