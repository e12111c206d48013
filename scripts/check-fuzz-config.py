#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Stuart Alldred.

"""Validate a deferfuzz config YAML against the schema and the loader.
Use this when authoring a custom config to sanity-check before a long fuzz run.
Exit 0 if valid; non-zero and message on failure.
"""

from __future__ import annotations

import sys
from dataclasses import fields
from pathlib import Path

# Add project root so we can import deferfuzz
_project_root = Path(__file__).resolve().parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))


def _describe(value: object) -> str:
    if value is None:
        return "disabled"
    if isinstance(value, tuple):
        return " ".join(value)
    return str(value)


def main() -> int:
    if len(sys.argv) != 2:
        print("Usage: check-fuzz-config.py <path-to-config.yaml>", file=sys.stderr)
        return 2
    from deferfuzz.core.fuzz_config import load_fuzz_config

    path = Path(sys.argv[1])
    try:
        config = load_fuzz_config(path)
    except ValueError as e:
        print(f"Invalid config: {e}", file=sys.stderr)
        return 1
    print(f"OK: {path}")
    for f in fields(config):
        print(f"  {f.name}: {_describe(getattr(config, f.name))}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
