#!/usr/bin/env python3
"""CI enforcement: the scoring package stays free of I/O and logging.

``proplead.scoring`` may import the standard library's pure modules,
``proplead.models``, and itself.  Modules that perform I/O or draw
randomness are rejected.
"""

from __future__ import annotations

import ast
import sys
from pathlib import Path

SCORING_DIR = Path(__file__).resolve().parent.parent / "src" / "proplead" / "scoring"

FORBIDDEN_MODULES = frozenset({
    "io",
    "json",
    "logging",
    "os",
    "pathlib",
    "random",
    "requests",
    "socket",
    "sqlite3",
    "subprocess",
    "sys",
    "threading",
    "yaml",
})
ALLOWED_PROJECT_MODULES = ("proplead.models", "proplead.scoring")


def _violation(module: str) -> bool:
    root = module.split(".")[0]
    if root == "proplead":
        return not module.startswith(ALLOWED_PROJECT_MODULES)
    return root in FORBIDDEN_MODULES


def check(scoring_dir: Path = SCORING_DIR) -> list[str]:
    violations: list[str] = []
    for py_file in sorted(scoring_dir.rglob("*.py")):
        tree = ast.parse(py_file.read_text(encoding="utf-8"))
        rel = py_file.relative_to(scoring_dir)
        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                for alias in node.names:
                    if _violation(alias.name):
                        violations.append(f"{rel}:{node.lineno}: import {alias.name}")
            elif isinstance(node, ast.ImportFrom):
                if node.module and node.level == 0 and _violation(node.module):
                    violations.append(f"{rel}:{node.lineno}: from {node.module}")
    return violations


def main() -> None:
    violations = check()
    if violations:
        print("ERROR: impure imports found in proplead.scoring:")
        for v in violations:
            print(f"  {v}")
        sys.exit(1)
    print("OK: proplead.scoring imports no I/O modules")


if __name__ == "__main__":
    main()
