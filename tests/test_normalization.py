import pytest
from clarivana_utils.ingredients.normalization import normalize_text, tokenize


@pytest.mark.parametrize(
    "input_text, expected_text",
    [
        ("Contains Yellow 5 and water", "contains yellow 5 and water"),
        ("E–330", "e-330"),
        ("E—330 ‑ E331", "e-330 - e331"),
        ("Baker’s Yeast", "baker s yeast"),
        ("Ingredients:\nWater,  Sugar", "ingredients water sugar"),
        ("  MSG\t(E621) ", "msg e621"),
        ("snake_case-word", "snake_case-word"),
        ("Crème", "cr me"),
        ("***", ""),
    ],
)
def test_normalize_text(input_text, expected_text):
    """Test that normalize_text lower-cases, folds dashes and strips punctuation."""
    assert normalize_text(input_text) == expected_text


def test_normalize_text_empty_string():
    assert normalize_text("") == ""


@pytest.mark.parametrize(
    "text",
    [
        "",
        "Ingredients: Water, Sugar, Red 40, Ascorbic Acid",
        "  E–102 ‐ FD&C Yellow No. 5  ",
        "Ⅻ ÀÉÎ ß non‑breaking―bar",
        "tabs\tand\r\nnewlines",
        "'quoted' “double” ’single’",
    ],
)
def test_normalize_text_is_idempotent(text):
    once = normalize_text(text)
    assert normalize_text(once) == once


def test_normalized_text_only_has_allowed_characters():
    text = normalize_text("Sodium Benzoate (E211); <Preservative> 100% ©")
    assert text == "sodium benzoate e211 preservative 100"
    assert set(text) <= set("abcdefghijklmnopqrstuvwxyz0123456789 -_")


def test_tokenize():
    assert tokenize("yellow 5 and yellow") == frozenset({"yellow", "5", "and"})
    assert tokenize("") == frozenset()
