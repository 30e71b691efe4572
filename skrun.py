#!/usr/bin/env python3
"""sparkk8s CLI entrypoint -- run without pip install.

Usage:
    python skrun.py check
    python skrun.py --help
"""

import sys
from pathlib import Path

# Add src/ to import path so the sparkk8s package is importable
sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))

from sparkk8s.cli import app

if __name__ == "__main__":
    app()
