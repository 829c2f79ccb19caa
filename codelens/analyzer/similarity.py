MIN_COMPARABLE_LENGTH = 10
MIN_TOKEN_LENGTH = 4
DEFAULT_CONTAINMENT_SCORE = 0.8


def _long_words(text: str) -> set[str]:
    return {word for word in text.split() if len(word) >= MIN_TOKEN_LENGTH}


def similarity(a: str, b: str, containment_score: float = DEFAULT_CONTAINMENT_SCORE) -> float:
    """Lexical similarity of two finding texts in ``[0, 1]``.

    Containment of one text in the other scores ``containment_score``; otherwise
    the Jaccard index over words longer than three characters is returned.
    Texts shorter than ten characters never match.
    """
    if not a or not b:
        return 0.0

    if min(len(a), len(b)) < MIN_COMPARABLE_LENGTH:
        return 0.0

    lower_a = a.lower()
    lower_b = b.lower()

    if lower_a in lower_b or lower_b in lower_a:
        return containment_score

    words_a = _long_words(lower_a)
    words_b = _long_words(lower_b)
    union = words_a | words_b

    if not union:
        return 0.0

    return len(words_a & words_b) / len(union)
