"""Tests for configuration loading."""

import dataclasses
from pathlib import Path

import pytest

from tost_equivalence.config import AnalysisConfig, load_config
from tost_equivalence.data import DEFAULT_GROUPS, GroupSpec
from tost_equivalence.errors import InvalidInputError


REPO_CONFIG = Path(__file__).parent.parent / "config" / "analysis_config.yaml"


class TestAnalysisConfig:
    """Tests for AnalysisConfig."""

    def test_defaults(self):
        config = AnalysisConfig()

        assert config.test.low_bound == -5.0
        assert config.test.high_bound == 5.0
        assert config.test.alpha == 0.05
        assert config.test.equal_variance
        assert config.simulation.groups == DEFAULT_GROUPS
        assert config.output.save_figures

    def test_from_empty(self):
        assert AnalysisConfig.from_dict(None) == AnalysisConfig()

    def test_partial_sections(self):
        config = AnalysisConfig.from_dict({"test": {"alpha": 0.1, "equal_variance": False}})

        assert config.test.alpha == 0.1
        assert not config.test.equal_variance
        assert config.test.low_bound == -5.0

    def test_groups(self):
        config = AnalysisConfig.from_dict({
            "simulation": {
                "seed": 1,
                "groups": [
                    {"name": "a", "mean": 10, "sd": 2, "n": 5},
                    {"name": "b", "mean": 11, "sd": 3, "n": 6},
                ],
            },
        })

        assert config.simulation.seed == 1
        assert config.simulation.groups[1] == GroupSpec("b", 11.0, 3.0, 6)

    @pytest.mark.parametrize("data", [
        {"plots": {}},
        {"test": {"bounds": [-1, 1]}},
        {"simulation": {"groups": [{"name": "a", "mean": 1}]}},
        {"simulation": {"groups": [{"name": "a", "mean": 1, "sd": 0, "n": 5}]}},
        ["not", "a", "mapping"],
    ])
    def test_invalid(self, data):
        with pytest.raises(InvalidInputError):
            AnalysisConfig.from_dict(data)

    def test_round_trip(self):
        config = AnalysisConfig.from_dict({"output": {"directory": "out", "save_figures": False}})
        assert AnalysisConfig.from_dict(config.to_dict()) == config


class TestLoadConfig:
    """Tests for YAML loading."""

    def test_repository_config(self):
        config = load_config(REPO_CONFIG)

        assert [g.name for g in config.simulation.groups] == ["monolingual", "bilingual"]
        assert config.test.low_bound < config.test.high_bound

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("test:\n  low_bound: -2\n  high_bound: 3\noutput:\n  figure_formats: [svg]\n")

        config = load_config(path)

        assert config.test.low_bound == -2
        assert config.test.high_bound == 3
        assert config.output.figure_formats == ["svg"]

    def test_numeric_strings_coerced(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text('test:\n  alpha: 5e-2\n  low_bound: "-5"\n  high_bound: 5\n')

        config = load_config(path)

        assert isinstance(config.test.alpha, float)
        assert config.test.alpha == pytest.approx(0.05)
        assert config.test.low_bound == -5.0
        assert isinstance(config.test.high_bound, float)

    @pytest.mark.parametrize("text", [
        "test:\n  equal_variance: \"yes\"\n",
        "test:\n  alpha: five percent\n",
        "output:\n  save_figures: \"no\"\n",
        "test: [unclosed\n",
        "test:\n  alpha: 0.05\n   low_bound: -5\n",
    ])
    def test_invalid_file(self, tmp_path, text):
        path = tmp_path / "config.yaml"
        path.write_text(text)

        with pytest.raises(InvalidInputError):
            load_config(path)


class TestDefaultGroups:
    """Default simulation groups are shared between configs."""

    def test_group_specs_are_immutable(self):
        config = AnalysisConfig()

        with pytest.raises(dataclasses.FrozenInstanceError):
            config.simulation.groups[0].n = 5

        assert DEFAULT_GROUPS[0].n == 40
        assert AnalysisConfig().simulation.groups[0].n == 40

    def test_group_list_not_shared(self):
        config = AnalysisConfig()
        config.simulation.groups.append(GroupSpec("extra", 10.0, 2.0, 5))

        assert len(DEFAULT_GROUPS) == 2
