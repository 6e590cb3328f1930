"""Character-table transforms shared by product matching and ranking.

Two static tables drive everything here:

* :data:`RU_TO_LATIN` spells Cyrillic letters with Latin ones. Upper and lower
  case have their own rows, so ``transliterate("Жук")`` gives ``"Zhuk"``.
* :data:`LAYOUT_MAP` maps a key on a QWERTY keyboard to the letter printed on
  the same key of the Russian ЙЦУКЕН layout. It repairs queries such as
  ``"abkmnh"`` that were typed with the wrong layout active (``"фильтр"``).

Neither transform folds case; callers run :func:`fold` themselves.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

_RU_TO_LATIN_LOWER = {
    "а": "a",
    "б": "b",
    "в": "v",
    "г": "g",
    "д": "d",
    "е": "e",
    "ё": "e",
    "ж": "zh",
    "з": "z",
    "и": "i",
    "й": "y",
    "к": "k",
    "л": "l",
    "м": "m",
    "н": "n",
    "о": "o",
    "п": "p",
    "р": "r",
    "с": "s",
    "т": "t",
    "у": "u",
    "ф": "f",
    "х": "h",
    "ц": "ts",
    "ч": "ch",
    "ш": "sh",
    "щ": "sch",
    "ъ": "",
    "ы": "y",
    "ь": "",
    "э": "e",
    "ю": "yu",
    "я": "ya",
}
# Upper-case rows capitalize only the first Latin letter of a digraph (Ж -> Zh).
_RU_TO_LATIN_UPPER = {ru.upper(): latin.capitalize() for ru, latin in _RU_TO_LATIN_LOWER.items()}

RU_TO_LATIN: Mapping[str, str] = MappingProxyType({**_RU_TO_LATIN_LOWER, **_RU_TO_LATIN_UPPER})

_QWERTY_LOWER = "qwertyuiop[]asdfghjkl;'zxcvbnm,./"
_JCUKEN_LOWER = "йцукенгшщзхъфывапролджэячсмитьбю."
_QWERTY_UPPER = 'QWERTYUIOP{}ASDFGHJKL:"ZXCVBNM<>?'
_JCUKEN_UPPER = "ЙЦУКЕНГШЩЗХЪФЫВАПРОЛДЖЭЯЧСМИТЬБЮ,"

LAYOUT_MAP: Mapping[str, str] = MappingProxyType(
    {
        **dict(zip(_QWERTY_LOWER, _JCUKEN_LOWER)),
        **dict(zip(_QWERTY_UPPER, _JCUKEN_UPPER)),
    }
)


def fold(text: str) -> str:
    """Case-fold text for comparisons."""
    return text.lower()


def transliterate(text: str) -> str:
    """Spell Cyrillic letters with Latin ones, leaving everything else alone."""
    return "".join(RU_TO_LATIN.get(ch, ch) for ch in text)


def fix_layout(text: str) -> str:
    """Re-type ``text`` as if the Russian keyboard layout had been active."""
    return "".join(LAYOUT_MAP.get(ch, ch) for ch in text)
