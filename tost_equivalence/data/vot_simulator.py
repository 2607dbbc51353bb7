"""
Simulated voice-onset time (VOT) data for equivalence testing.

Each group of speakers produces VOT tokens (in ms) drawn from a normal
distribution. The resulting long-format table has one row per token.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Dict, Any, Optional, Union

import numpy as np
import pandas as pd

from ..errors import InvalidInputError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GroupSpec:
    """Distribution parameters for one simulated group."""
    name: str
    mean: float
    sd: float
    n: int

    def __post_init__(self):
        if self.n < 2:
            raise InvalidInputError(f"Group {self.name} needs n >= 2, got {self.n}")
        if not self.sd > 0:
            raise InvalidInputError(f"Group {self.name} needs sd > 0, got {self.sd}")

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "mean": self.mean, "sd": self.sd, "n": self.n}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GroupSpec":
        return cls(
            name=str(data["name"]),
            mean=float(data["mean"]),
            sd=float(data["sd"]),
            n=int(data["n"]),
        )


# Short-lag VOT for voiceless stops, two comparable speaker groups
DEFAULT_GROUPS = [
    GroupSpec(name="monolingual", mean=17.0, sd=6.0, n=40),
    GroupSpec(name="bilingual", mean=16.0, sd=6.0, n=40),
]


class VOTSimulator:
    """
    Generator for two-group VOT tables.

    Draws are reproducible for a given seed.
    """

    def __init__(self, seed: Optional[int] = 42):
        self.seed = seed
        self.rng = np.random.default_rng(seed)

    def simulate_group(self, spec: GroupSpec) -> pd.DataFrame:
        """Simulate the tokens of one group."""
        values = self.rng.normal(loc=spec.mean, scale=spec.sd, size=spec.n)
        return pd.DataFrame({
            "speaker": [f"{spec.name}_{i + 1:02d}" for i in range(spec.n)],
            "group": spec.name,
            "vot": values,
        })

    def simulate(self, groups: Optional[List[GroupSpec]] = None) -> pd.DataFrame:
        """
        Simulate a long-format VOT table.

        Args:
            groups: Group specifications (defaults to DEFAULT_GROUPS)

        Returns:
            DataFrame with columns speaker, group, vot
        """
        groups = groups if groups is not None else DEFAULT_GROUPS
        if len(groups) < 2:
            raise InvalidInputError("At least two groups are required")
        names = [g.name for g in groups]
        if len(set(names)) != len(names):
            raise InvalidInputError(f"Group names must be unique: {names}")

        frames = [self.simulate_group(spec) for spec in groups]
        df = pd.concat(frames, ignore_index=True)

        logger.info(
            f"Simulated {len(df)} VOT tokens across {len(groups)} groups (seed={self.seed})"
        )
        return df


def simulate_vot_dataset(
    mean1: float = 17.0,
    sd1: float = 6.0,
    n1: int = 40,
    mean2: float = 16.0,
    sd2: float = 6.0,
    n2: int = 40,
    labels: tuple = ("monolingual", "bilingual"),
    seed: Optional[int] = 42,
) -> pd.DataFrame:
    """Simulate the two-group VOT table used throughout the analysis."""
    groups = [
        GroupSpec(name=labels[0], mean=mean1, sd=sd1, n=n1),
        GroupSpec(name=labels[1], mean=mean2, sd=sd2, n=n2),
    ]
    return VOTSimulator(seed).simulate(groups)


def load_vot_table(
    path: Union[str, Path],
    group_column: str = "group",
    value_column: str = "vot",
) -> pd.DataFrame:
    """
    Load a long-format VOT table from CSV.

    Non-numeric measurements become missing and are dropped.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"VOT table not found: {path}")

    df = pd.read_csv(path)
    missing = [col for col in (group_column, value_column) if col not in df.columns]
    if missing:
        raise InvalidInputError(f"{path} is missing columns: {missing}")

    df[value_column] = pd.to_numeric(df[value_column], errors="coerce")
    before = len(df)
    df = df.dropna(subset=[group_column, value_column]).reset_index(drop=True)
    if before != len(df):
        logger.warning(f"Dropped {before - len(df)} rows with missing values from {path}")
    if df.empty:
        raise InvalidInputError(f"{path} contains no usable observations")

    logger.info(f"Loaded {len(df)} observations from {path}")
    return df
