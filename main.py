#!/usr/bin/env python3
"""
Building Health X - Entry Point

Looks up NYC residential buildings across NYC Open Data and scores them.

Usage:
    python main.py serve [--port PORT]
    python main.py lookup <bbl> [-o report.json]
    python main.py datasets

For more options:
    python main.py --help
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from building_health.cli import main

if __name__ == "__main__":
    sys.exit(main())
