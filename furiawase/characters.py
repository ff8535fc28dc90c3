"""
Character classification and kana conversion for furiawase.

Decides which characters of a written word may carry more than one
reading (kanji) and which must pass through the alignment unchanged,
and provides the kana conversions used when normalizing dictionary
readings.
"""

import re
from typing import Dict

# ============================================================================
# Kana Character Tables
# ============================================================================

# Each class maps to its (hiragana, katakana) pair
KANA_CHARACTERS = {
    "a": "あア",     "i": "いイ",     "u": "うウ",     "e": "えエ",     "o": "おオ",
    "ka": "かカ",    "ki": "きキ",    "ku": "くク",    "ke": "けケ",    "ko": "こコ",
    "sa": "さサ",    "shi": "しシ",   "su": "すス",    "se": "せセ",    "so": "そソ",
    "ta": "たタ",    "chi": "ちチ",   "tsu": "つツ",   "te": "てテ",    "to": "とト",
    "na": "なナ",    "ni": "にニ",    "nu": "ぬヌ",    "ne": "ねネ",    "no": "のノ",
    "ha": "はハ",    "hi": "ひヒ",    "fu": "ふフ",    "he": "へヘ",    "ho": "ほホ",
    "ma": "まマ",    "mi": "みミ",    "mu": "むム",    "me": "めメ",    "mo": "もモ",
    "ya": "やヤ",                     "yu": "ゆユ",                     "yo": "よヨ",
    "ra": "らラ",    "ri": "りリ",    "ru": "るル",    "re": "れレ",    "ro": "ろロ",
    "wa": "わワ",    "wi": "ゐヰ",                     "we": "ゑヱ",    "wo": "をヲ",
    "n": "んン",
    "ga": "がガ",    "gi": "ぎギ",    "gu": "ぐグ",    "ge": "げゲ",    "go": "ごゴ",
    "za": "ざザ",    "ji": "じジ",    "zu": "ずズ",    "ze": "ぜゼ",    "zo": "ぞゾ",
    "da": "だダ",    "dji": "ぢヂ",   "dzu": "づヅ",   "de": "でデ",    "do": "どド",
    "ba": "ばバ",    "bi": "びビ",    "bu": "ぶブ",    "be": "べベ",    "bo": "ぼボ",
    "pa": "ぱパ",    "pi": "ぴピ",    "pu": "ぷプ",    "pe": "ぺペ",    "po": "ぽポ",
    "vu": "ゔヴ",
}

MODIFIER_CHARACTERS = {
    "sokuon": "っッ",
    "+a": "ぁァ", "+i": "ぃィ", "+u": "ぅゥ", "+e": "ぇェ", "+o": "ぉォ",
    "+ya": "ゃャ", "+yu": "ゅュ", "+yo": "ょョ", "+wa": "ゎヮ",
    "iter": "ゝヽ", "iter_v": "ゞヾ",
}

ALL_CHARACTERS = {**MODIFIER_CHARACTERS, **KANA_CHARACTERS}

CHAR_CLASS_HASH: Dict[str, str] = {}
for char_class, chars in ALL_CHARACTERS.items():
    for char in chars:
        CHAR_CLASS_HASH[char] = char_class

# Unvoiced -> voiced
DAKUTEN_HASH = {
    "ka": "ga", "ki": "gi", "ku": "gu", "ke": "ge", "ko": "go",
    "sa": "za", "shi": "ji", "su": "zu", "se": "ze", "so": "zo",
    "ta": "da", "chi": "dji", "tsu": "dzu", "te": "de", "to": "do",
    "ha": "ba", "hi": "bi", "fu": "bu", "he": "be", "ho": "bo",
}

# Unvoiced -> semi-voiced
HANDAKUTEN_HASH = {
    "ha": "pa", "hi": "pi", "fu": "pu", "he": "pe", "ho": "po",
}

# Kanji iteration mark (noma)
ITERATION_MARK = "々"

# ============================================================================
# Regular Expressions
# ============================================================================

KATAKANA_REGEX = r"[ァ-ヺヽヾー]"
HIRAGANA_REGEX = r"[ぁ-ゔゝゞー]"
KANJI_REGEX = r"[々ヶ〆一-龯㐀-䶵]"
KANJI_CHAR_REGEX = r"[一-龯㐀-䶵]"
KANA_REGEX = f"(?:{KATAKANA_REGEX}|{HIRAGANA_REGEX})"

_KATAKANA_WORD = re.compile(rf"^{KATAKANA_REGEX}+$")
_HIRAGANA_WORD = re.compile(rf"^{HIRAGANA_REGEX}+$")
_KANA_WORD = re.compile(rf"^{KANA_REGEX}+$")
_KANJI_WORD = re.compile(rf"^{KANJI_REGEX}+$")
_KANJI_CHAR = re.compile(rf"^{KANJI_CHAR_REGEX}$")


# ============================================================================
# Character Testing Functions
# ============================================================================

def is_kana(word: str) -> bool:
    """Check if word consists entirely of kana (hiragana or katakana)."""
    return bool(word) and bool(_KANA_WORD.match(word))


def is_hiragana(word: str) -> bool:
    """Check if word consists entirely of hiragana."""
    return bool(word) and bool(_HIRAGANA_WORD.match(word))


def is_katakana(word: str) -> bool:
    """Check if word consists entirely of katakana."""
    return bool(word) and bool(_KATAKANA_WORD.match(word))


def is_kanji(word: str) -> bool:
    """Check if word consists entirely of kanji, counting 々ヶ〆."""
    return bool(word) and bool(_KANJI_WORD.match(word))


def is_kanji_char(char: str) -> bool:
    """Check if a single character is an ideograph proper."""
    return bool(_KANJI_CHAR.match(char))


def is_iteration_mark(char: str) -> bool:
    return char == ITERATION_MARK


def is_multi_reading(char: str) -> bool:
    """
    Classify a character for segment construction.

    Ideographs may take any of several dictionary readings; everything
    else (kana, punctuation, Latin text, the iteration mark itself) has
    to appear verbatim in the reading.

    Args:
        char: A single character.

    Returns:
        True if the character is eligible for multiple candidate readings.
    """
    return len(char) == 1 and is_kanji_char(char)


# ============================================================================
# Kana Conversion
# ============================================================================

def _convert_kana(text: str, index: int) -> str:
    result = []
    for char in text:
        char_class = CHAR_CLASS_HASH.get(char)
        if char_class:
            result.append(ALL_CHARACTERS[char_class][index])
        else:
            result.append(char)
    return ''.join(result)


def as_hiragana(text: str) -> str:
    """
    Convert katakana to hiragana.

    Args:
        text: Text to convert.

    Returns:
        Text with katakana converted to hiragana; other characters untouched.
    """
    return _convert_kana(text, 0)


def as_katakana(text: str) -> str:
    """Convert hiragana to katakana."""
    return _convert_kana(text, -1)


# ============================================================================
# Sound Changes
# ============================================================================

def rendaku(text: str, handakuten: bool = False) -> str:
    """
    Apply rendaku (sequential voicing) to the first character.

    Rendaku converts unvoiced consonants to voiced (e.g., か→が), which is
    how the second element of a compound is often read (e.g., 人々 ひとびと).

    Args:
        text: Text to modify.
        handakuten: If True, apply handakuten (semi-voicing) instead.

    Returns:
        Text with the first character voiced, or the text unchanged when
        the first character has no voiced form.
    """
    if not text:
        return text

    first_char = text[0]
    cc = CHAR_CLASS_HASH.get(first_char)
    if not cc:
        return text

    voiced = (HANDAKUTEN_HASH if handakuten else DAKUTEN_HASH).get(cc)
    if not voiced:
        return text

    pos = KANA_CHARACTERS[cc].find(first_char)
    return KANA_CHARACTERS[voiced][pos] + text[1:]


def geminate(text: str) -> str:
    """
    Replace the last character with a sokuon (っ/ッ).

    Used for compounds such as 学校 (がっこう), where がく is shortened
    to がっ before a following consonant.
    """
    if not text:
        return text

    if is_katakana(text[-1]):
        return text[:-1] + "ッ"
    return text[:-1] + "っ"
