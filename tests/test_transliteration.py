import pytest

from football_insights.transliteration import CYRILLIC_TO_LATIN, contains_cyrillic, transliterate


def test_table_covers_russian_alphabet():
    assert len(CYRILLIC_TO_LATIN) == 33


@pytest.mark.parametrize(
    "source, expected",
    [
        ("Зенит", "Zenit"),
        ("Спартак Москва", "Spartak Moskva"),
        ("ЦСКА", "TsSKA"),
        ("Локомотив", "Lokomotiv"),
        ("Жальгирис", "Zhalgiris"),
        ("Шахтёр", "Shakhter"),
        ("Крылья Советов", "Krylya Sovetov"),
        ("Рубин-2", "Rubin-2"),
    ],
)
def test_transliterate_known_clubs(source, expected):
    assert transliterate(source) == expected


def test_transliterate_preserves_case_per_letter():
    assert transliterate("зЕНИТ") == "zENIT"
    assert transliterate("Щ") == "Shch"
    assert transliterate("щ") == "shch"


def test_latin_text_passes_through():
    assert transliterate("FC Zenit 1925") == "FC Zenit 1925"
    assert transliterate("") == ""


@pytest.mark.parametrize(
    "text, expected",
    [("Зенит", True), ("Zenit", False), ("FC Зенит", True), ("", False), ("Ñandú", False)],
)
def test_contains_cyrillic(text, expected):
    assert contains_cyrillic(text) is expected
