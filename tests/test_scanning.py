import pytest

from clarivana_utils.ingredients import (
    IngredientResolver,
    load_dictionary,
    scan_label_text,
)


@pytest.fixture(scope="module")
def resolver():
    return IngredientResolver(load_dictionary())


def test_scan_reports_allergies_and_harmful_ingredients(resolver):
    outcome = scan_label_text(
        "Ingredients: sugar, Red 40, sodium benzoate. May contain peanuts.",
        resolver,
        allergies=["Peanuts", "Soy"],
    )
    assert outcome.allergy_alerts == ("Peanuts",)
    assert outcome.matched_ids == ("E129", "E211")
    assert outcome.match.allergy_alerts == ("Peanuts",)
    assert outcome.report.count == 2
    assert outcome.report.allergy_alerts == ("Peanuts",)
    assert [item.name for item in outcome.report.items] == [
        "Allura Red AC",
        "Sodium Benzoate",
    ]


def test_scan_numbered_color_spellings(resolver):
    outcome = scan_label_text("COLOURS: YELLOW-5, yellow6", resolver)
    assert outcome.matched_ids == ("E102", "E110")


def test_scan_generic_words_all_clear(resolver):
    outcome = scan_label_text("Water, sugar, yellow corn meal, salt, natural flavor", resolver)
    assert outcome.matched_ids == ()
    assert outcome.report.all_clear


@pytest.mark.parametrize("text", [None, "", "  \n "])
def test_scan_empty_text(resolver, text):
    outcome = scan_label_text(text, resolver, allergies=["milk"])
    assert outcome.raw_text == (text or "")
    assert outcome.allergy_alerts == ()
    assert outcome.report.all_clear


def test_scan_before_dictionary_is_loaded():
    outcome = scan_label_text("Red 40, MSG", IngredientResolver(), allergies=["msg"])
    assert outcome.allergy_alerts == ("msg",)
    assert outcome.report.all_clear
