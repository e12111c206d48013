# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Stuart Alldred.

"""Load fuzz settings from YAML config: generator budget and the toolchain commands."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from deferfuzz.core.generator_base import DEFAULT_BUDGET

DEFAULT_RUN = ("go", "run", "{path}")
DEFAULT_TIMEOUT = 60.0


@dataclass(frozen=True)
class FuzzConfig:
    """Resolved settings. check is None when the syntax check is disabled."""

    budget: int = DEFAULT_BUDGET
    run: tuple[str, ...] = DEFAULT_RUN
    check: tuple[str, ...] | None = None
    timeout: float = DEFAULT_TIMEOUT


def get_schema_path() -> Path:
    """Path to the fuzz config JSON Schema (for validation of user and default configs)."""
    return Path(__file__).resolve().parent.parent / "config" / "fuzz_config_schema.json"


def get_default_config_path() -> Path:
    """Path to the default fuzz config shipped with deferfuzz."""
    return Path(__file__).resolve().parent.parent / "config" / "fuzz_default.yaml"


def validate_fuzz_config(raw: dict[str, Any], path: Path | None = None) -> None:
    """Validate parsed YAML against the fuzz config schema. Raises ValueError on failure."""
    import jsonschema

    schema = json.loads(get_schema_path().read_text())
    try:
        jsonschema.validate(instance=raw, schema=schema)
    except jsonschema.ValidationError as e:
        loc = f" ({path})" if path else ""
        msg = getattr(e, "message", str(e))
        raise ValueError(f"Fuzz config schema validation failed{loc}: {msg}") from e


def load_fuzz_config(path: Path) -> FuzzConfig:
    """Load and validate a fuzz config. Missing keys take the built-in defaults."""
    import yaml

    try:
        raw = yaml.safe_load(path.read_text())
    except (OSError, yaml.YAMLError) as e:
        raise ValueError(f"Cannot read fuzz config {path}: {e}") from e
    if not raw:
        raise ValueError(f"Fuzz config is empty: {path}")
    if not isinstance(raw, dict):
        raise ValueError(f"Fuzz config must be a mapping: {path}")
    validate_fuzz_config(raw, path)

    fuzz = raw.get("fuzz") or {}
    toolchain = raw.get("toolchain") or {}
    check = toolchain.get("check")
    return FuzzConfig(
        budget=int(fuzz.get("budget", DEFAULT_BUDGET)),
        run=tuple(toolchain.get("run", DEFAULT_RUN)),
        check=tuple(check) if check is not None else None,
        timeout=float(toolchain.get("timeout", DEFAULT_TIMEOUT)),
    )
