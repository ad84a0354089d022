from __future__ import annotations

import sys
import textwrap
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
for entry in (ROOT, ROOT / "src"):
    if str(entry) not in sys.path:
        sys.path.insert(0, str(entry))


import pytest


@pytest.fixture
def write_source(tmp_path: Path):
    def _write(source: str, name: str = "module.py") -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(source).lstrip("\n"), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def nested_source(write_source) -> Path:
    # Line 5 is the body of D.e.
    return write_source(
        """
        class A:
            def b(self):
                def c():
                    class D:
                        def e(self): pass
                    return D
                return c
        """
    )
