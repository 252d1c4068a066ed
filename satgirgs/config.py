"""Pydantic models describing generator runs and instance suites."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

from satgirgs.geometry.hyperbolic import default_radius


# ---------------------------------------------------------------------------
# Single-graph generation
# ---------------------------------------------------------------------------

class SatGirgConfig(BaseModel):
    """Parameters of one SAT-GIRG instance (variables + clauses)."""
    model_config = ConfigDict(populate_by_name=True)

    n: int = Field(..., ge=2, description="Number of non-clause (variable) nodes")
    clauses: Optional[int] = Field(
        default=None, ge=0,
        description="Number of clause nodes; defaults to n",
        validation_alias=AliasChoices("clauses", "m"),
    )
    dimension: int = Field(default=2, ge=1, le=5)
    ple: float = Field(default=2.5, gt=1.0, description="Power-law exponent of the weights")
    weight_seed: int = Field(default=12, description="Negative = non-deterministic")
    position_seed: int = Field(default=130)
    clause_weight_seed: int = Field(default=1400)
    clause_position_seed: int = Field(default=16000)
    parallel: bool = True
    workers: Optional[int] = Field(default=None, ge=1)
    debug_mode: bool = Field(
        default=False,
        description="Connect clauses to variables instead of variables to each other",
    )

    @property
    def num_clauses(self) -> int:
        return self.n if self.clauses is None else self.clauses


class HyperbolicConfig(BaseModel):
    """Parameters of one threshold hyperbolic random graph."""
    n: int = Field(..., ge=1)
    alpha: float = Field(default=0.75, gt=0.5)
    radius: Optional[float] = Field(default=None, gt=0.0, description="Disk radius R")
    angle_seed: int = Field(default=1)
    radius_seed: int = Field(default=2)
    parallel: bool = True
    workers: Optional[int] = Field(default=None, ge=1)
    max_level: int = Field(default=16, ge=0, le=30)

    @property
    def disk_radius(self) -> float:
        if self.radius is not None:
            return self.radius
        return default_radius(self.n)


# ---------------------------------------------------------------------------
# Instance suites
# ---------------------------------------------------------------------------

class GeneratorConfig(BaseModel):
    """Configuration for a single instance generator."""
    model_config = ConfigDict(populate_by_name=True)

    type: str = Field(..., description="Generator type, e.g. 'satgirg'")
    params: dict[str, Any] = Field(
        default_factory=dict,
        description="Extra generator params (e.g. {'ple': 2.8})",
        validation_alias=AliasChoices("params", "parameters"),
    )
    sizes: list[int] = Field(..., description="Graph sizes to generate")
    count_per_size: int = Field(default=1, ge=1, description="Instances per size")

    @model_validator(mode="after")
    def _check_sizes(self) -> "GeneratorConfig":
        if not self.sizes:
            raise ValueError("At least one size is required")
        if any(s < 1 for s in self.sizes):
            raise ValueError(f"Sizes must be positive, got {self.sizes}")
        return self


class InstanceConfig(BaseModel):
    """Specifies which instances to generate."""
    generators: list[GeneratorConfig]
    output_dir: Optional[str] = Field(
        default=None, description="Directory to write .dot files into",
    )
