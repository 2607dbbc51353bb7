"""
Configuration for equivalence analyses.

Settings are read from a YAML file with three sections:
``simulation``, ``test`` and ``output``. Missing keys fall back to
the defaults below.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Dict, Any, Optional, Union

import yaml

from .data.vot_simulator import GroupSpec, DEFAULT_GROUPS
from .errors import InvalidInputError


@dataclass
class SimulationConfig:
    """Parameters of the simulated VOT table."""
    seed: Optional[int] = 42
    groups: List[GroupSpec] = field(default_factory=lambda: list(DEFAULT_GROUPS))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "groups": [g.to_dict() for g in self.groups],
        }


@dataclass
class EquivalenceTestConfig:
    """Equivalence bounds and test settings."""
    low_bound: float = -5.0
    high_bound: float = 5.0
    alpha: float = 0.05
    equal_variance: bool = True

    def __post_init__(self):
        # YAML may hand over strings such as "5e-2" or "-5"
        try:
            self.low_bound = float(self.low_bound)
            self.high_bound = float(self.high_bound)
            self.alpha = float(self.alpha)
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"Bounds and alpha must be numbers: {e}") from e
        if not isinstance(self.equal_variance, bool):
            raise InvalidInputError(
                f"equal_variance must be true or false, got {self.equal_variance!r}"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "low_bound": self.low_bound,
            "high_bound": self.high_bound,
            "alpha": self.alpha,
            "equal_variance": self.equal_variance,
        }


@dataclass
class OutputConfig:
    """Where and how run artifacts are written."""
    directory: str = "results"
    figure_formats: List[str] = field(default_factory=lambda: ["png", "pdf"])
    save_figures: bool = True

    def __post_init__(self):
        if not isinstance(self.save_figures, bool):
            raise InvalidInputError(f"save_figures must be true or false, got {self.save_figures!r}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "directory": self.directory,
            "figure_formats": self.figure_formats,
            "save_figures": self.save_figures,
        }


@dataclass
class AnalysisConfig:
    """Complete configuration for one analysis run."""
    simulation: SimulationConfig = field(default_factory=SimulationConfig)
    test: EquivalenceTestConfig = field(default_factory=EquivalenceTestConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "simulation": self.simulation.to_dict(),
            "test": self.test.to_dict(),
            "output": self.output.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "AnalysisConfig":
        data = data or {}
        if not isinstance(data, dict):
            raise InvalidInputError("Configuration root must be a mapping")

        unknown = set(data) - {"simulation", "test", "output"}
        if unknown:
            raise InvalidInputError(f"Unknown configuration sections: {sorted(unknown)}")

        sim_data = dict(data.get("simulation") or {})
        groups = sim_data.pop("groups", None)
        try:
            simulation = SimulationConfig(**sim_data)
            if groups is not None:
                simulation.groups = [GroupSpec.from_dict(g) for g in groups]
            test = EquivalenceTestConfig(**(data.get("test") or {}))
            output = OutputConfig(**(data.get("output") or {}))
        except (TypeError, KeyError, ValueError) as e:
            raise InvalidInputError(f"Invalid configuration: {e}") from e

        return cls(simulation=simulation, test=test, output=output)


def load_config(config_path: Union[str, Path]) -> AnalysisConfig:
    """Load configuration from YAML file."""
    with open(config_path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise InvalidInputError(f"Could not parse {config_path}: {e}") from e
    return AnalysisConfig.from_dict(data)
