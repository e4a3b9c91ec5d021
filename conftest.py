"""
Put `src` on sys.path so `pytest` works from a fresh checkout of the
src/ layout without `pip install -e .` first.
"""
from __future__ import annotations

import sys
from pathlib import Path

SRC = Path(__file__).parent.resolve() / "src"
if SRC.exists() and str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))
