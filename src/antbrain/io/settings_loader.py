from __future__ import annotations
import os
from typing import Any, Dict

import yaml
from pydantic import ValidationError

from antbrain.core.settings import EvolutionSettings, SettingsFileSpec
from antbrain.io.errors import LoaderError


def _read_yaml_file(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_settings(path: str | None) -> EvolutionSettings:
    """Load evolution settings from a YAML file.

    A missing path yields the defaults.

    Expected format:
    evolution:
      min_level: 2
      max_level: 5
      mutation_rate: 0.05
      action_weights:
        forward: 3.0
    """
    if not path or not os.path.exists(path):
        return EvolutionSettings()
    try:
        data = _read_yaml_file(path)
    except yaml.YAMLError as exc:
        raise LoaderError(path, "Invalid YAML in settings file", cause=exc) from exc
    if not isinstance(data, dict):
        raise LoaderError(path, "Settings file must contain a mapping")
    try:
        document = SettingsFileSpec.model_validate(data)
    except ValidationError as exc:
        raise LoaderError(path, "Invalid settings definition", cause=exc) from exc
    return document.evolution


__all__ = ["load_settings"]
