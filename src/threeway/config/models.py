"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, threeway.toml only contains overrides.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

BenchMode = Literal["three-way", "two-way", "both"]


# --- threeway.toml sections ---


class BenchConfig(BaseModel):
    """[bench] section."""

    model_config = {"frozen": True}

    depth: int = Field(default=14, ge=0)
    trials: int = Field(default=5, ge=1)
    iterations: int = Field(default=10, ge=1)
    mode: BenchMode = "both"


class LawsConfig(BaseModel):
    """[laws] section."""

    model_config = {"frozen": True}

    samples: int = Field(default=24, ge=1)
    seed: int = 0
    depth: int = Field(default=3, ge=0)
