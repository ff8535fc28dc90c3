"""
Normalization of dictionary readings into alignment candidates.

KANJIDIC readings are annotated: on'yomi are in katakana, kun'yomi mark
okurigana with a dot (た.べる) and affix use with a leading or trailing
hyphen (-づ.れ). Only the part written by the kanji itself can appear
in an alignment, so markers and okurigana are dropped and everything is
folded to hiragana.
"""

from typing import Iterable, List

from furiawase.characters import as_hiragana, geminate, rendaku

# Final kana that shorten to a sokuon before a voiceless consonant
GEMINATING_ENDINGS = "つちくき"


def normalize_reading(raw: str) -> str:
    """
    Turn a KANJIDIC-style reading into the kana the kanji contributes.

    Args:
        raw: Reading such as 'ジャク', 'つ.く' or '-づ.れ'.

    Returns:
        Hiragana reading, or '' if nothing is left.

    Example:
        >>> normalize_reading('-づ.れ')
        'づ'
        >>> normalize_reading('チャク')
        'ちゃく'
    """
    stem = raw.strip().split('.', 1)[0]
    return as_hiragana(stem.strip('-'))


def reading_variants(reading: str, voicing: bool = False,
                     gemination: bool = False) -> List[str]:
    """
    Expand a reading with the sound changes it undergoes in compounds.

    Order matters to the alignment: the plain reading comes first, then
    the voiced form, then the geminated form.
    """
    variants = [reading]

    if voicing:
        voiced = rendaku(reading)
        if voiced != reading:
            variants.append(voiced)
        # は行 also takes handakuten (一本 いっぽん)
        semi = rendaku(reading, handakuten=True)
        if semi != reading and semi != voiced:
            variants.append(semi)

    if gemination and len(reading) >= 2 and reading[-1] in GEMINATING_ENDINGS:
        variants.append(geminate(reading))

    return variants


def candidate_readings(raws: Iterable[str], voicing: bool = False,
                       gemination: bool = False) -> List[str]:
    """
    Build the candidate list for one kanji from its dictionary readings.

    Readings are normalized, expanded with their variants, and
    de-duplicated keeping the first occurrence. Readings that normalize
    to nothing are dropped.

    Args:
        raws: Readings as stored in the dictionary.
        voicing: Add rendaku variants.
        gemination: Add sokuon variants.

    Returns:
        Ordered list of non-empty hiragana candidates.
    """
    seen = set()
    result = []

    for raw in raws:
        reading = normalize_reading(raw)
        if not reading:
            continue
        for variant in reading_variants(reading, voicing, gemination):
            if variant not in seen:
                seen.add(variant)
                result.append(variant)

    return result


def check_reading_map(mapping, source: str = "") -> None:
    """
    Check that ``mapping`` is a {character: [readings]} object.

    Raises:
        ValueError: If it is not a dict, or a value is not a list of strings.
    """
    prefix = f"{source}: " if source else ""

    if not isinstance(mapping, dict):
        raise ValueError(f"{prefix}expected a JSON object of character -> readings")

    for char, readings in mapping.items():
        if not isinstance(readings, list) or not all(isinstance(r, str) for r in readings):
            raise ValueError(f"{prefix}readings for {char!r} must be a list of strings")
