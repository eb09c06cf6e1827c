"""Run each example script and compare stdout with its ``# =>`` comments."""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

import pytest

_ROOT = Path(__file__).resolve().parents[2]
_EXAMPLES = (
    "ex_01_counter/01_counter.py",
    "ex_02_scope_tree/01_scope_tree.py",
    "ex_03_async_run/01_async_run.py",
)


def _expected_output(script: Path) -> list[str]:
    return [
        line.split("# =>", maxsplit=1)[1].strip()
        for line in script.read_text(encoding="utf-8").splitlines()
        if "# =>" in line
    ]


@pytest.mark.parametrize("example", _EXAMPLES)
def test_example_prints_annotated_output(example: str) -> None:
    script = _ROOT / "examples" / example
    python_path = [str(_ROOT / "src"), os.environ.get("PYTHONPATH", "")]
    env = {**os.environ, "PYTHONPATH": os.pathsep.join(filter(None, python_path))}

    completed = subprocess.run(  # noqa: S603
        [sys.executable, str(script)],
        env=env,
        capture_output=True,
        text=True,
        check=False,
    )

    assert completed.returncode == 0, completed.stderr
    assert completed.stderr == ""
    assert completed.stdout.splitlines() == _expected_output(script)
