#!/usr/bin/env python3
"""
RadialWave - Application Entry Point

Usage:
  python app.py                  # Start GUI
  python app.py --dev            # Verbose logging
  python app.py --config my.json
"""

import sys
from pathlib import Path

# 源码运行时把 src 加入路径
sys.path.insert(0, str(Path(__file__).parent / "src"))

from radialwave.app import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
