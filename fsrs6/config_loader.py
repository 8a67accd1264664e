from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from fsrs6.errors import InvalidParameters
from fsrs6.parameters import Parameters, generate_parameters


def load_parameters(path: str | Path, **overrides: Any) -> Parameters:
    """
    Build `Parameters` from a JSON object such as
    `{"request_retention": 0.85, "w": [...], "learning_steps": ["1m", "10m"]}`.
    """
    path = Path(path)
    data = _read_json(path)
    try:
        return generate_parameters(data, **overrides)
    except InvalidParameters as exc:
        raise InvalidParameters(f"{path}: {exc}") from exc


def _read_json(path: Path) -> dict:
    with path.open("r", encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object.")
    return data


__all__ = ["load_parameters"]
