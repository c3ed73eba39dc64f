"""Simple version check for the package.

Verifies that the ``__version__`` attribute matches the expected release
string."""

import importlib
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

bassline_walk = importlib.import_module("bassline_walk")


def test_version_matches():
    """Ensure ``bassline_walk.__version__`` exposes the release version."""
    assert bassline_walk.__version__ == "0.1.0"
