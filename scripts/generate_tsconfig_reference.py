#!/usr/bin/env python3
# Purpose: generate output/<lang>.md, output/<lang>.json, output/<lang>-summary.json and output/languages.json
# from data/ and copy/ under the repository root.
from __future__ import annotations

import sys
from pathlib import Path

from tsconfig_reference.cli import main

ROOT = Path(__file__).resolve().parents[1]


if __name__ == "__main__":
    raise SystemExit(main(["--root", str(ROOT), *sys.argv[1:]]))
