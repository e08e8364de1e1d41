import subprocess
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent


@pytest.mark.parametrize(
    "module",
    [
        "app.infrastructure.database.repositories.ledger_store",
        "app.modules.ledger",
        "app.interfaces.http.routers.ledger",
        "app.main",
    ],
)
def test_module_imports_in_a_fresh_interpreter(module):
    # conftest has already imported the package here, so load order only shows in a new process.
    result = subprocess.run(
        [sys.executable, "-c", f"import {module}"],
        cwd=PROJECT_ROOT,
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0, result.stderr


def test_ledger_domain_does_not_import_the_sql_layer():
    result = subprocess.run(
        [
            sys.executable,
            "-c",
            "import sys, app.modules.ledger; "
            "assert 'app.infrastructure.database.repositories.ledger_store' not in sys.modules",
        ],
        cwd=PROJECT_ROOT,
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0, result.stderr
