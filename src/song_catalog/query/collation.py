# song_catalog/query/collation.py

"""Chinese (zh-CN, pinyin order) string collation for song names.

Ordering follows the usual zh-CN collator layout:

- whitespace and punctuation first,
- then digits,
- then Han characters ordered by pinyin and tone,
- then Latin (and other) letters, compared case-insensitively.

Case and exact characters only decide between strings that are otherwise
equal, so "ABC" sorts before "abd" and "abc" sorts before "ABC".
"""

from __future__ import annotations

from functools import lru_cache

from pypinyin import Style, lazy_pinyin

_PUNCTUATION = 0
_DIGIT = 1
_HAN = 2
_LETTER = 3

CollationKey = tuple[tuple[tuple[int, str], ...], tuple[str, ...]]


def _keep_chars(chunk: str) -> list[str]:
    # One output item per input character so results align with the input.
    return list(chunk)


@lru_cache(maxsize=4096)
def collation_key(text: str) -> CollationKey:
    """Return a sort key ordering `text` like a zh-CN collator."""
    syllables = lazy_pinyin(
        text,
        style=Style.TONE3,
        errors=_keep_chars,
        neutral_tone_with_five=True,
    )
    if len(syllables) != len(text):
        # Alignment lost (should not happen); fall back to per-character lookups.
        syllables = [
            lazy_pinyin(ch, style=Style.TONE3, errors=_keep_chars, neutral_tone_with_five=True)[0]
            for ch in text
        ]

    primary: list[tuple[int, str]] = []
    for ch, syllable in zip(text, syllables):
        if syllable != ch:
            primary.append((_HAN, syllable))
        elif ch.isdigit():
            primary.append((_DIGIT, ch))
        elif ch.isalpha():
            primary.append((_LETTER, ch.casefold()))
        else:
            primary.append((_PUNCTUATION, ch))

    # Lowercase before uppercase on the final tie-break.
    tertiary = tuple(ch.swapcase() for ch in text)
    return tuple(primary), tertiary


def compare_names(a: str, b: str) -> int:
    """Three-way compare two names; negative, zero or positive."""
    key_a = collation_key(a)
    key_b = collation_key(b)
    if key_a < key_b:
        return -1
    if key_a > key_b:
        return 1
    return 0
