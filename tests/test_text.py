"""Tests for transliteration, layout correction and case folding."""

from catalog.text import LAYOUT_MAP, RU_TO_LATIN, fix_layout, fold, transliterate


def test_transliterate_uses_digraphs_and_drops_signs():
    assert transliterate("жщц") == "zhschts"
    assert transliterate("объезд") == "obezd"
    assert transliterate("мель") == "mel"


def test_transliterate_preserves_case_per_row():
    assert transliterate("Жук") == "Zhuk"
    assert transliterate("ЩИТ") == "SchIT"
    assert transliterate("Смазка Валера") == "Smazka Valera"


def test_transliterate_passes_through_latin_digits_and_punctuation():
    assert transliterate("VL-100, ok!") == "VL-100, ok!"


def test_transliterate_is_idempotent_on_latin_input():
    text = "Filter 42 / oil"
    assert transliterate(transliterate(text)) == transliterate(text)


def test_fix_layout_maps_qwerty_to_jcuken():
    assert fix_layout("abkmnh") == "фильтр"
    assert fix_layout("cvfprf") == "смазка"
    assert fix_layout("Ghbdtn") == "Привет"


def test_fix_layout_punctuation_rows():
    assert fix_layout("[];',./") == "хъжэбю."
    assert fix_layout('{}:"<>?') == "ХЪЖЭБЮ,"


def test_fix_layout_leaves_unmapped_characters():
    assert fix_layout("фильтр 123") == "фильтр 123"


def test_fold_lowercases_both_scripts():
    assert fold("ФиЛьТр OIL") == "фильтр oil"


def test_tables_are_read_only():
    for table in (RU_TO_LATIN, LAYOUT_MAP):
        try:
            table["x"] = "y"  # type: ignore[index]
        except TypeError:
            continue
        raise AssertionError("lookup table accepted an assignment")
