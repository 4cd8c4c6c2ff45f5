"""
Command line entry point: compile a declaration source file and write the rewritten source.

    python-tree-bridge estree_map.py -o estree_map_compiled.py
"""
import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import List
from typing import Optional

from python_tree_bridge import __version__
from python_tree_bridge.config import BridgeConfig
from python_tree_bridge.driver import DeclarationSource
from python_tree_bridge.errors import BridgeCompileError

__all__ = ["create_parser", "main"]

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    defaults = BridgeConfig()
    parser = argparse.ArgumentParser(
        prog="python-tree-bridge",
        description="Expand node mapping declarations into A->B and B->A conversion functions.",
    )
    parser.add_argument("input", type=Path, help="Declaration source file")
    output = parser.add_mutually_exclusive_group()
    output.add_argument("-o", "--out", type=Path, help="Write the compiled source here (default: stdout)")
    output.add_argument("--in-place", action="store_true", help="Overwrite the input file with the compiled source")
    output.add_argument(
        "--list", action="store_true", help="List the declarations found in the input, without compiling"
    )
    parser.add_argument(
        "--seed-table", default=defaults.seed_table, help="Name of the dispatch table seed (default: %(default)s)"
    )
    parser.add_argument(
        "--declaration",
        default=defaults.declaration_name,
        help="Name of the mapping declaration function (default: %(default)s)",
    )
    parser.add_argument(
        "--param", default=defaults.param_name, help="Parameter name of generated functions (default: %(default)s)"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: %(default)s)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(args: Optional[List[str]] = None) -> int:
    parsed_args = create_parser().parse_args(args)

    logging.basicConfig(level=getattr(logging, parsed_args.log_level), format="%(levelname)s: %(message)s")

    config = dataclasses.replace(
        BridgeConfig(),
        seed_table=parsed_args.seed_table,
        declaration_name=parsed_args.declaration,
        param_name=parsed_args.param,
    )

    try:
        stream = DeclarationSource(parsed_args.input.name, parsed_args.input)
        if parsed_args.list:
            for declaration in stream.find_declarations(config):
                print(f"{declaration.lineno}: {declaration.a_tag} <-> {declaration.b_ctor_name}")
            return 0
        compiled = stream.compile(config)
    except BridgeCompileError as e:
        logger.error("%s", e)
        return 1
    except (OSError, SyntaxError, UnicodeDecodeError) as e:
        logger.error("Could not read %s: %s", parsed_args.input, e)
        return 1

    if parsed_args.in_place:
        parsed_args.input.write_text(compiled + "\n")
    elif parsed_args.out:
        parsed_args.out.write_text(compiled + "\n")
    else:
        sys.stdout.write(compiled + "\n")
    return 0
