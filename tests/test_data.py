"""Tests for data module."""

import pytest
import numpy as np
import pandas as pd

from tost_equivalence.data import (
    SampleSummary,
    GroupSpec,
    VOTSimulator,
    DEFAULT_GROUPS,
    simulate_vot_dataset,
    summarize_groups,
    describe_groups,
    load_vot_table,
)
from tost_equivalence.errors import InvalidInputError


class TestVOTSimulator:
    """Tests for the VOT simulator."""

    def test_default_shape(self):
        df = VOTSimulator(seed=42).simulate()

        assert list(df.columns) == ["speaker", "group", "vot"]
        assert len(df) == sum(g.n for g in DEFAULT_GROUPS)
        assert list(pd.unique(df["group"])) == [g.name for g in DEFAULT_GROUPS]

    def test_reproducible(self):
        df1 = simulate_vot_dataset(seed=7)
        df2 = simulate_vot_dataset(seed=7)
        df3 = simulate_vot_dataset(seed=8)

        pd.testing.assert_frame_equal(df1, df2)
        assert not np.allclose(df1["vot"], df3["vot"])

    def test_group_parameters(self):
        df = simulate_vot_dataset(
            mean1=60.0, sd1=5.0, n1=500,
            mean2=20.0, sd2=5.0, n2=300,
            labels=("aspirated", "unaspirated"),
        )
        means = df.groupby("group")["vot"].mean()

        assert (df["group"] == "aspirated").sum() == 500
        assert (df["group"] == "unaspirated").sum() == 300
        assert means["aspirated"] == pytest.approx(60.0, abs=1.0)
        assert means["unaspirated"] == pytest.approx(20.0, abs=1.0)

    def test_speaker_ids_unique(self):
        df = simulate_vot_dataset()
        assert df["speaker"].is_unique

    def test_requires_two_groups(self):
        with pytest.raises(InvalidInputError):
            VOTSimulator().simulate([GroupSpec("only", 10.0, 2.0, 10)])

    def test_duplicate_names_rejected(self):
        groups = [GroupSpec("a", 10.0, 2.0, 10), GroupSpec("a", 12.0, 2.0, 10)]
        with pytest.raises(InvalidInputError):
            VOTSimulator().simulate(groups)

    @pytest.mark.parametrize("sd,n", [(0.0, 10), (-1.0, 10), (2.0, 1)])
    def test_invalid_group_spec(self, sd, n):
        with pytest.raises(InvalidInputError):
            GroupSpec("bad", 10.0, sd, n)

    def test_group_spec_round_trip(self):
        spec = GroupSpec("g", 15.5, 3.0, 12)
        assert GroupSpec.from_dict(spec.to_dict()) == spec


class TestSummaries:
    """Tests for group summaries."""

    def test_from_observations(self):
        summary = SampleSummary.from_observations([1.0, 2.0, 3.0], label="x")

        assert summary.mean == pytest.approx(2.0)
        assert summary.standard_deviation == pytest.approx(1.0)
        assert summary.size == 3
        assert summary.standard_error == pytest.approx(1 / np.sqrt(3))

    def test_missing_values_dropped(self):
        summary = SampleSummary.from_observations([1.0, np.nan, 3.0])
        assert summary.size == 2
        assert summary.mean == pytest.approx(2.0)

    def test_too_few_observations(self):
        with pytest.raises(InvalidInputError):
            SampleSummary.from_observations([4.0, np.nan])

    def test_summarize_groups(self):
        df = simulate_vot_dataset(seed=3)
        summaries = summarize_groups(df)

        assert list(summaries) == ["monolingual", "bilingual"]
        for label, summary in summaries.items():
            values = df.loc[df["group"] == label, "vot"]
            assert summary.label == label
            assert summary.size == len(values)
            assert summary.mean == pytest.approx(values.mean())
            assert summary.standard_deviation == pytest.approx(values.std(ddof=1))

    def test_summarize_missing_column(self):
        df = pd.DataFrame({"group": ["a", "b"], "value": [1.0, 2.0]})
        with pytest.raises(InvalidInputError):
            summarize_groups(df)

    def test_describe_groups(self):
        df = pd.DataFrame({
            "group": ["a", "a", "a", "b", "b"],
            "vot": [1.0, 2.0, 3.0, 10.0, 20.0],
        })
        table = describe_groups(df)

        assert list(table.index) == ["a", "b"]
        assert list(table.columns) == ["n", "mean", "sd", "min", "max"]
        assert table.loc["a", "n"] == 3
        assert table.loc["b", "mean"] == pytest.approx(15.0)
        assert table.loc["a", "sd"] == pytest.approx(1.0)

    def test_to_dict(self):
        summary = SampleSummary(10.0, 2.0, 5, "g")
        assert summary.to_dict() == {
            "label": "g", "mean": 10.0, "standard_deviation": 2.0, "size": 5,
        }


class TestLoadVOTTable:
    """Tests for CSV loading."""

    def test_load(self, tmp_path):
        path = tmp_path / "vot.csv"
        path.write_text("group,vot\na,12.5\na,14\nb,n/a\nb,11\nb,13\n")

        df = load_vot_table(path)

        assert len(df) == 4
        assert df["vot"].dtype.kind == "f"
        assert summarize_groups(df)["b"].size == 2

    def test_custom_columns(self, tmp_path):
        path = tmp_path / "vot.csv"
        path.write_text("lang,ms\nx,1\nx,2\ny,3\ny,4\n")

        df = load_vot_table(path, group_column="lang", value_column="ms")

        assert set(summarize_groups(df, "lang", "ms")) == {"x", "y"}

    def test_missing_columns(self, tmp_path):
        path = tmp_path / "vot.csv"
        path.write_text("speaker,vot\ns1,1\n")
        with pytest.raises(InvalidInputError):
            load_vot_table(path)

    def test_no_usable_rows(self, tmp_path):
        path = tmp_path / "vot.csv"
        path.write_text("group,vot\na,\nb,x\n")
        with pytest.raises(InvalidInputError):
            load_vot_table(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_vot_table(tmp_path / "absent.csv")
