"""
Rule-based French lemmatizer used to key hierarchy concepts.

Suffix rules are tried in order (longest and most specific first); the
first matching suffix is replaced. This is a heuristic, not a dictionary
lemmatizer: "chats" -> "chat", "parlaient" -> "parler", "finissent" ->
"finir".
"""

from holomem.config.constants import MIN_LEMMATIZE_LENGTH

RULES = (
    # Noun and adjective endings
    ("euses", "eux"),
    ("eaux", "eau"),
    ("elles", "el"),
    ("aux", "al"),
    ("euse", "eux"),
    ("ives", "if"),
    ("elle", "el"),
    ("ive", "if"),
    # Subjonctif imparfait
    ("assent", "er"),
    ("assiez", "er"),
    ("assions", "er"),
    ("issent", "ir"),
    ("ussiez", "re"),
    ("ussions", "re"),
    ("asses", "er"),
    ("isse", "ir"),
    ("usse", "re"),
    ("ât", "er"),
    ("ît", "ir"),
    ("ût", "re"),
    # Imparfait / conditionnel
    ("issaient", "ir"),
    ("eraient", "er"),
    ("issions", "ir"),
    ("issiez", "ir"),
    ("erions", "er"),
    ("eriez", "er"),
    ("aient", "er"),
    ("issait", "ir"),
    ("issais", "ir"),
    ("erait", "er"),
    ("erais", "er"),
    ("ions", "er"),
    ("iez", "er"),
    ("ait", "er"),
    ("ais", "er"),
    # Futur
    ("eront", "er"),
    ("erons", "er"),
    ("erez", "er"),
    ("erai", "er"),
    ("eras", "er"),
    ("era", "er"),
    # Passé simple
    ("èrent", "er"),
    ("irent", "ir"),
    ("urent", "re"),
    ("âmes", "er"),
    ("îmes", "ir"),
    ("ûmes", "re"),
    ("âtes", "er"),
    ("îtes", "ir"),
    ("ûtes", "re"),
    # Présent
    ("issant", "ir"),
    ("ons", "er"),
    ("ez", "er"),
    ("ent", "er"),
    # Participe passé
    ("ées", "er"),
    ("ée", "er"),
    ("és", "er"),
    ("é", "er"),
    ("is", "ir"),
    ("it", "ir"),
    ("u", "re"),
    # Plural (lowest priority)
    ("s", ""),
)


def lemmatize(word: str) -> str:
    """
    Reduce a French word to an approximate base form.

    Words shorter than MIN_LEMMATIZE_LENGTH are returned unchanged, and
    the plural rule never strips a double "ss" ("bass" stays "bass").

    Example:
        >>> lemmatize("bateaux")
        'bateau'
        >>> lemmatize("Dog")
        'Dog'
    """
    if len(word) < MIN_LEMMATIZE_LENGTH:
        return word

    for suffix, replacement in RULES:
        if word.endswith(suffix):
            if suffix == "s" and word.endswith("ss"):
                continue
            return word[: len(word) - len(suffix)] + replacement

    return word
