"""Shared pytest fixtures for gwrap tests.

Fixtures build throw-away project directories with the layout gwrap reads:

    <project>/gwrap_config.json
    <project>/cpp_package.json
    <project>/cpp_modules/<package>/include/

Fixture Scopes:
- function: Default, recreated for each test
"""

import sys
import json
import shutil
import tempfile
from pathlib import Path
from typing import Generator, List, Optional
import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from gwraplib.tool_detection import clear_cache
from gwraplib.wrapper_types import GwrapConfig


@pytest.fixture
def temp_dir() -> Generator[str, None, None]:
    """Create a temporary directory for tests.

    Scope: function (default)
    Use for: File I/O operations that need isolation
    """
    tmpdir = tempfile.mkdtemp(prefix="gwrap_test_")
    yield tmpdir
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def gwrap_config(temp_dir: str) -> GwrapConfig:
    """GwrapConfig rooted at an empty temporary project directory.

    Scope: function
    Dependencies: temp_dir
    """
    return GwrapConfig.for_directory(temp_dir)


@pytest.fixture
def fake_compiler(temp_dir: str) -> str:
    """Create an existing file to use as a configured compiler path.

    Scope: function
    Dependencies: temp_dir
    """
    bin_dir = Path(temp_dir) / "tool chain" / "bin"
    bin_dir.mkdir(parents=True)
    compiler = bin_dir / "g++.exe"
    compiler.write_text("")
    return str(compiler)


@pytest.fixture(autouse=True)
def fresh_tool_cache() -> Generator[None, None, None]:
    """Start and finish every test with an empty tool detection cache."""
    clear_cache()
    yield
    clear_cache()


def write_tool_config(config: GwrapConfig, gpp_path: str) -> None:
    """Write a well-formed gwrap_config.json naming gpp_path."""
    Path(config.config_file).write_text(json.dumps({"gpp_path": gpp_path}, indent=2))


def make_package(config: GwrapConfig, name: str, with_include: bool = True) -> Path:
    """Create cpp_modules/<name>, optionally with an include folder.

    Returns:
        Path of the package directory
    """
    package_dir = Path(config.modules_dir) / name
    package_dir.mkdir(parents=True, exist_ok=True)
    if with_include:
        (package_dir / config.include_subdir).mkdir()
    return package_dir


def write_manifest(config: GwrapConfig, includes: Optional[List[str]] = None, raw: Optional[str] = None) -> None:
    """Write cpp_package.json from a list of include paths, or raw text."""
    if raw is None:
        dependencies = [{"name": f"pkg{i}", "include": path} for i, path in enumerate(includes or [])]
        raw = json.dumps({"name": "app", "dependencies": dependencies}, indent=2)
    Path(config.package_manifest).write_text(raw)
