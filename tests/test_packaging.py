#!/usr/bin/env python3
"""
Tests that setup.py install_requires matches what the source tree imports.
"""

import ast
import re
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
LOCAL_MODULES = {"pressure_design", "utils", "tools", "omnitools", "server"}
SOURCE_DIRS = ["pressure_design", "utils", "tools", "omnitools"]


def declared_requirements():
    tree = ast.parse((ROOT / "setup.py").read_text(encoding="utf-8"))
    for node in ast.walk(tree):
        if isinstance(node, ast.keyword) and node.arg == "install_requires":
            names = [ast.literal_eval(elt) for elt in node.value.elts]
            return {re.split(r"[<>=!~\[]", name)[0].strip().lower() for name in names}
    raise AssertionError("install_requires not found in setup.py")


def imported_top_level_modules():
    files = [ROOT / "server.py"]
    for directory in SOURCE_DIRS:
        files.extend((ROOT / directory).rglob("*.py"))

    modules = set()
    for path in files:
        tree = ast.parse(path.read_text(encoding="utf-8"))
        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                modules.update(alias.name.split(".")[0] for alias in node.names)
            elif isinstance(node, ast.ImportFrom) and node.level == 0 and node.module:
                modules.add(node.module.split(".")[0])
    return modules


class TestDeclaredDependencies:
    """Runtime requirements are exactly the third-party imports."""

    def test_every_requirement_is_imported(self):
        unused = declared_requirements() - imported_top_level_modules()
        assert not unused, f"Declared but never imported: {sorted(unused)}"

    @pytest.mark.skipif(not hasattr(sys, "stdlib_module_names"), reason="needs Python 3.10+")
    def test_every_third_party_import_is_declared(self):
        third_party = {
            m for m in imported_top_level_modules()
            if m not in sys.stdlib_module_names and m not in LOCAL_MODULES
        }
        assert third_party <= declared_requirements()
