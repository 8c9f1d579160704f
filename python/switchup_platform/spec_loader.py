"""Load and validate SwitchUp engine specs."""

from __future__ import annotations

import json
import os
from pathlib import Path

from pydantic import ValidationError

from switchup_platform.spec_models import EngineSpec


PLATFORM_NAME = "SwitchUp"

BUNDLED_SPEC_PATH = Path(__file__).parent / "specs" / "switchup.json"


def resolve_spec_path(spec_path: str | None = None) -> Path:
    """Resolve explicit path or ENGINE_SPEC_PATH. Spec is required."""
    raw_path = (spec_path or os.environ.get("ENGINE_SPEC_PATH") or "").strip()
    if not raw_path:
        raise RuntimeError(
            "Engine spec path is required. Set ENGINE_SPEC_PATH or pass --engine-spec."
        )
    return Path(raw_path).expanduser()


def load_engine_spec(spec_path: str | None = None) -> tuple[EngineSpec, Path]:
    """Load engine spec JSON from disk with strict validation."""
    resolved_path = resolve_spec_path(spec_path).resolve()
    if not resolved_path.exists():
        raise RuntimeError(
            f"Engine spec file not found at '{resolved_path}'. "
            "Set ENGINE_SPEC_PATH or provide a valid --engine-spec path."
        )

    try:
        with open(resolved_path, "r", encoding="utf-8") as spec_file:
            raw_spec = json.load(spec_file)
    except OSError as exc:
        raise RuntimeError(
            f"Failed to read engine spec '{resolved_path}': {exc}"
        ) from exc
    except json.JSONDecodeError as exc:
        raise RuntimeError(
            f"Engine spec at '{resolved_path}' is not valid JSON: {exc}"
        ) from exc

    try:
        return EngineSpec.model_validate(raw_spec), resolved_path
    except ValidationError as exc:
        raise RuntimeError(
            f"Engine spec validation failed for '{resolved_path}': {exc}"
        ) from exc
