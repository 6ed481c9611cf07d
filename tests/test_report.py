import pytest

from clarivana_utils.ingredients.dictionary import record_from_dict
from clarivana_utils.ingredients.report import (
    NOT_AVAILABLE,
    REPORT_COLUMNS,
    build_report,
    report_to_dataframe,
)


@pytest.fixture
def records():
    return [
        record_from_dict(
            {
                "id": "E102",
                "name": "Tartrazine",
                "category": "Food Coloring",
                "riskLevel": "High",
                "description": "Synthetic yellow azo dye.",
                "toxicity": {"acute": "Hives"},
                "regulatoryStatus": {"EU": "Warning label", "USA": "Permitted"},
                "healthEffects": [{"effect": "Hyperactivity"}],
                "references": ["https://example.org/e102"],
            }
        ),
        record_from_dict({"id": "E951", "name": "Aspartame"}),
    ]


def test_all_clear_report():
    report = build_report([])
    assert report.all_clear
    assert report.count == 0
    assert report.title == "All Clear"
    assert report.message == "No harmful ingredients detected in this scan."
    assert report.to_dict()["items"] == []


def test_report_fields(records):
    report = build_report(records, allergy_alerts=["milk"])
    assert not report.all_clear
    assert report.count == 2
    assert report.title == "2 harmful items detected"
    assert report.message == "Contains: Tartrazine, Aspartame"
    assert report.allergy_alerts == ("milk",)

    tartrazine, aspartame = report.items
    assert tartrazine.id == "E102"
    assert tartrazine.risk_level == "High"
    assert tartrazine.toxicity_acute == "Hives"
    assert tartrazine.toxicity_chronic == NOT_AVAILABLE
    assert tartrazine.regulatory_status == (("EU", "Warning label"), ("USA", "Permitted"))
    assert tartrazine.health_effects == ("Hyperactivity",)

    assert aspartame.category is None
    assert aspartame.risk_level is None
    assert aspartame.description == ""
    assert aspartame.toxicity_acute == NOT_AVAILABLE
    assert aspartame.toxicity_chronic == NOT_AVAILABLE
    assert aspartame.health_effects == ()


def test_single_match_title(records):
    assert build_report(records[:1]).title == "1 harmful item detected"


def test_report_to_dict(records):
    data = build_report(records).to_dict()
    assert data["count"] == 2
    assert data["all_clear"] is False
    item = data["items"][0]
    assert item["name"] == "Tartrazine"
    assert item["regulatory_status"] == {"EU": "Warning label", "USA": "Permitted"}
    assert item["health_effects"] == ["Hyperactivity"]
    assert item["references"] == ["https://example.org/e102"]


def test_report_to_dataframe(records):
    df = report_to_dataframe(build_report(records))
    assert list(df.columns) == REPORT_COLUMNS
    assert list(df["id"]) == ["E102", "E951"]
    assert df.loc[0, "regulatory_status"] == "EU: Warning label; USA: Permitted"
    assert df.loc[1, "toxicity_chronic"] == NOT_AVAILABLE


def test_empty_report_to_dataframe():
    df = report_to_dataframe(build_report([]))
    assert df.empty
    assert list(df.columns) == REPORT_COLUMNS
