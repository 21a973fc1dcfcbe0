"""Evolution parameters and the schema of settings files."""

from __future__ import annotations

import random
from typing import Dict, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from antbrain.core.actions.catalogue import ActionCatalogue


class EvolutionSettings(BaseModel):
    """Parameters for random generation and breeding."""

    min_level: int = Field(default=2, ge=0)
    max_level: int = Field(default=5, ge=1)
    mutation_rate: float = Field(default=0.05, ge=0.0, le=1.0)
    population_size: int = Field(default=20, ge=0)
    seed: Optional[int] = None
    action_weights: Dict[str, float] = Field(default_factory=dict)

    model_config = {"extra": "forbid"}

    @field_validator("action_weights")
    @classmethod
    def validate_weights(cls, v: Dict[str, float]) -> Dict[str, float]:
        for kind, weight in v.items():
            if weight <= 0:
                raise ValueError(f"weight for '{kind}' must be positive, got {weight}")
        return v

    @model_validator(mode="after")
    def validate_levels(self) -> "EvolutionSettings":
        if self.min_level > self.max_level:
            raise ValueError(f"min_level ({self.min_level}) must not exceed max_level ({self.max_level})")
        return self

    def make_rng(self) -> random.Random:
        """Random source seeded from ``seed`` (unseeded when absent)."""
        return random.Random(self.seed)

    def apply_weights(self, catalogue: ActionCatalogue) -> ActionCatalogue:
        """
        Copy ``action_weights`` onto the catalogue.

        Raises:
            ValueError: If a weight names an unregistered kind
        """
        for kind, weight in self.action_weights.items():
            if kind not in catalogue:
                known = ", ".join(catalogue.list_registered_types())
                raise ValueError(f"Unknown action kind in weights: {kind} (known: {known})")
            catalogue.set_weight(kind, weight)
        return catalogue

    def build_catalogue(self) -> ActionCatalogue:
        """Fresh default catalogue with these weights applied."""
        return self.apply_weights(ActionCatalogue.with_defaults())


class SettingsFileSpec(BaseModel):
    evolution: EvolutionSettings = Field(default_factory=EvolutionSettings)

    model_config = {"extra": "forbid"}


__all__ = ["EvolutionSettings", "SettingsFileSpec"]
