"""
Conversion between ESTree records and the estree_nodes classes. Each `map()` declaration below is expanded by
python-tree-bridge into an entry of A_TO_B and a register_B_to_A() call.
"""
from estree_nodes import *  # noqa: F401,F403

A_TO_B = {"NoBase": None}
B_TO_A = {}


def from_A(node):
    if node is None:
        return None
    return A_TO_B[node["type"]](node)


def to_A(node):
    if node is None:
        return None
    return B_TO_A[type(node)](node)


def from_A_list(nodes):
    return [from_A(n) for n in nodes]


def to_A_list(nodes):
    return [to_A(n) for n in nodes]


def unwrap_block(block):
    return block.body


def rewrap_block(statements):
    return {"type": "BlockStatement", "body": to_A_list(statements)}


def derive_start(node):
    return node.get("start")


def derive_end(node):
    return node.get("end")


def register_B_to_A(ctor, to_a_func):
    def with_span(node):
        record = to_a_func(node)
        if node.start is not None:
            record["start"] = node.start
        if node.end is not None:
            record["end"] = node.end
        return record

    B_TO_A[ctor] = with_span


# Statements
map("Program", B_Toplevel, "body@body")
map("ExpressionStatement", B_SimpleStatement, "expression>body")
map("BlockStatement", B_BlockStatement, "body@body")
map("WhileStatement", B_While, "test>condition, body%body")
map("EmptyStatement", B_EmptyStatement)

# Expressions
map("Literal", B_String, "value=value")
map("ArrayExpression", B_Array, "elements@elements")
map("MemberExpression", B_Dot, "object>expression, property=property")
