"""Test package for flagroster."""

from __future__ import annotations

import sys
from pathlib import Path


# Make ``flagroster`` importable from src/ when the project is not installed.
SRC_ROOT = Path(__file__).resolve().parents[1] / "src"
if SRC_ROOT.is_dir() and str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))
