import sys
from pathlib import Path
from types import ModuleType
from typing import Generator

import pytest

from python_tree_bridge import compile_file
from python_tree_bridge.util import import_module_from_file

SAMPLE_PROJECTS = Path(__file__).parent / "sample-projects"

_module_counter = 1


@pytest.fixture
def estree_dir() -> Path:
    return SAMPLE_PROJECTS / "estree"


@pytest.fixture
def estree_bridge(estree_dir: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[ModuleType, None, None]:
    """Compile the sample ESTree declarations and import the result as a module"""
    global _module_counter
    monkeypatch.syspath_prepend(str(estree_dir))
    module_file = tmp_path / "estree_bridge.py"
    module_file.write_text(compile_file(estree_dir / "estree_map.py"))

    module_name = f"estree_bridge_{_module_counter}"
    _module_counter += 1
    module = import_module_from_file(module_name, module_file)
    yield module
    del sys.modules[module_name]
