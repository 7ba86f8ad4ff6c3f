"""
Run the Thunee engine test suite.

Usage (from project root):

    python tests.py [pytest args...]

Installs the ``dev`` extra first when pytest or the package is not importable.
"""
from __future__ import annotations

import subprocess
import sys
from pathlib import Path


ROOT = Path(__file__).resolve().parent


def ensure_test_dependencies() -> None:
    try:
        import pytest  # noqa: F401
        import thunee  # noqa: F401
        return
    except ImportError:
        pass

    print("Installing package with test dependencies (.[dev]) ...")
    subprocess.check_call(
        [sys.executable, "-m", "pip", "install", "-e", ".[dev]"],
        cwd=str(ROOT),
    )


def main() -> None:
    ensure_test_dependencies()
    subprocess.check_call(
        [sys.executable, "-m", "pytest", *sys.argv[1:]],
        cwd=str(ROOT),
    )


if __name__ == "__main__":
    main()
