#!/usr/bin/env python
"""
Filter Maker - Root-level launcher
"""

import sys
from pathlib import Path

# Add project root to sys.path so filtermaker is importable
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from filtermaker.main import main

if __name__ == "__main__":
    sys.exit(main())
