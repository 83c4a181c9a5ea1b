"""Reading and writing run configs and reports as JSON."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from cafarank.config import CurationRunConfig
from cafarank.core.errors import ContractViolation

M = TypeVar("M", bound=BaseModel)


def model_to_dict(model: BaseModel) -> dict[str, Any]:
    """Plain JSON-compatible dict (NaN and inf become null)."""
    return json.loads(model.model_dump_json())


def write_model(model: BaseModel, path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(model.model_dump_json(indent=2), encoding="utf-8")
    return path


def read_model(model_cls: type[M], path: str | Path) -> M:
    path = Path(path)
    return model_cls.model_validate_json(path.read_text(encoding="utf-8"))


def load_run_config(path: str | Path) -> CurationRunConfig:
    """Load a run config; relative input paths resolve against the config's directory."""
    path = Path(path)
    try:
        config = read_model(CurationRunConfig, path)
    except ValidationError as e:
        raise ContractViolation(f"invalid run config {path}: {e}") from e

    base = path.parent
    updates = {}
    for field in ("roster_path", "stats_path"):
        value = getattr(config, field)
        if value and not Path(value).is_absolute():
            updates[field] = str(base / value)
    return config.model_copy(update=updates)
