"""Import-order tests for the API packages."""

import subprocess
import sys
from pathlib import Path

import pytest

SRC = Path(__file__).resolve().parents[3] / "src"


@pytest.mark.parametrize(
    "module",
    [
        "api.dependencies.auth",
        "api.dependencies.services",
        "api.routes.health",
        "api.v1.routes.tasks",
        "main",
    ],
)
def test_module_imports_first_in_fresh_interpreter(module: str) -> None:
    """Each entry point can be the first module loaded without a cycle."""
    result = subprocess.run(
        [sys.executable, "-c", f"import {module}"],
        cwd=SRC,
        capture_output=True,
        text=True,
        timeout=60,
    )

    assert result.returncode == 0, result.stderr
