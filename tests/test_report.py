"""Tests for result reporting."""

import json

import pytest

from tost_equivalence.analysis import (
    EquivalenceConclusion,
    equivalence_test,
    format_equivalence_report,
    conclusion_sentence,
    export_result,
)


class TestFormatReport:
    """Tests for the text report."""

    def test_reference_report(self, vot_result):
        report = format_equivalence_report(vot_result, "monolingual", "bilingual")

        assert "monolingual - bilingual" in report
        assert "t(78) = 4.91" in report
        assert "t(78) = -2.325" in report
        assert "90% CI" in report
        assert "95% CI" in report
        assert "The equivalence test was significant" in report
        assert "The null hypothesis test was non-significant" in report
        assert "Conclusion: statistically equivalent to zero" in report

    def test_small_p_values(self, vot_result):
        report = format_equivalence_report(vot_result)
        assert "p < 0.001" in report

    def test_welch_degrees_of_freedom_shown_with_decimals(self):
        result = equivalence_test(10, 1, 20, 10, 4, 40, -2, 2, equal_variance=False)
        report = format_equivalence_report(result)
        assert "Welch" in report
        assert f"t({result.degrees_of_freedom:.2f})" in report

    @pytest.mark.parametrize("args,expected", [
        ((10.5, 2, 100000, 10, 2, 100000, -0.4, 0.6), "different from zero and statistically equivalent"),
        ((15, 1, 50, 10, 1, 50, -1, 1), "different from zero and statistically not equivalent"),
        ((10, 1, 50, 10, 1, 50, -0.1, 0.1), "not different from zero and statistically not equivalent"),
    ])
    def test_conclusion_sentence(self, args, expected):
        result = equivalence_test(*args)
        assert expected in conclusion_sentence(result)

    def test_every_conclusion_has_sentence(self, vot_result):
        from tost_equivalence.analysis.report import _CONCLUSION_SENTENCES
        assert set(_CONCLUSION_SENTENCES) == set(EquivalenceConclusion)


class TestExportResult:
    """Tests for JSON export."""

    def test_export(self, vot_result, tmp_path):
        path = export_result(vot_result, tmp_path / "out" / "result.json", {"seed": 42})

        with open(path) as f:
            payload = json.load(f)

        assert payload["result"]["conclusion"] == "equivalent"
        assert payload["result"]["degrees_of_freedom"] == 78
        assert payload["result"]["tost_ci"]["lower"] == pytest.approx(vot_result.tost_ci.lower)
        assert payload["metadata"] == {"seed": 42}

    def test_export_without_metadata(self, vot_result, tmp_path):
        path = export_result(vot_result, tmp_path / "result.json")
        with open(path) as f:
            assert "metadata" not in json.load(f)
