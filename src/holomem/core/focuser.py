"""
ConceptFocuser: Distill text into n-gram concepts.

Low-information words (French and English stop words) are removed and the
remaining tokens are turned into unigrams, bigrams and trigrams. These
n-grams are the "concepts" that get a reference wave each.
"""

from typing import List, Set

from holomem.config.constants import MIN_UNIGRAM_LENGTH, TOKEN_EDGE_KEEP


STOP_WORDS = frozenset({
    # French
    "a", "à", "alors", "au", "aucuns", "aussi", "autre", "autres", "aux",
    "avant", "avec", "avoir", "bon", "car", "ce", "ceci", "cela", "ces",
    "cette", "ceux", "chaque", "ci", "comme", "comment", "dans", "de", "des",
    "du", "dedans", "dehors", "depuis", "deux", "devrait", "doit", "donc",
    "dos", "droite", "dès", "début", "elle", "elles", "en", "encore", "essai",
    "est", "et", "eu", "fait", "faites", "fois", "font", "force", "haut",
    "hors", "ici", "il", "ils", "je", "juste", "la", "le", "les", "leur",
    "leurs", "lui", "ma", "maintenant", "mais", "mes", "mine", "moins",
    "mon", "mot", "même", "ne", "ni", "nommés", "nos", "notre", "nous",
    "nouveaux", "ou", "où", "par", "parce", "pas", "peut", "peu", "plupart",
    "pour", "pourquoi", "quand", "que", "quel", "quelle", "quelles", "quels",
    "qui", "sa", "sans", "ses", "seul", "seulement", "si", "sien", "soi",
    "soit", "son", "sont", "sous", "sur", "ta", "tandis", "tellement", "tels",
    "tes", "ton", "tous", "tout", "trop", "très", "tu", "un", "une",
    "voient", "vont", "vos", "votre", "vous", "vu", "y", "ça", "étaient",
    "état", "étions", "été", "être", "serait",
    # English
    "about", "above", "after", "again", "against", "all", "am", "an", "and",
    "any", "are", "aren't", "as", "at", "be", "because", "been", "before",
    "being", "below", "between", "both", "but", "by", "can't", "cannot",
    "could", "couldn't", "did", "didn't", "do", "does", "doesn't", "doing",
    "don't", "down", "during", "each", "few", "for", "from", "further",
    "had", "hadn't", "has", "hasn't", "have", "haven't", "having", "he",
    "he'd", "he'll", "he's", "her", "here", "here's", "hers", "herself",
    "him", "himself", "his", "how", "how's", "i", "i'd", "i'll", "i'm",
    "i've", "if", "in", "into", "is", "isn't", "it", "it's", "its", "itself",
    "let's", "me", "more", "most", "mustn't", "my", "myself", "no", "nor",
    "not", "of", "off", "on", "once", "only", "or", "other", "ought", "our",
    "ours", "ourselves", "out", "over", "own", "same", "shan't", "she",
    "she'd", "she'll", "she's", "should", "shouldn't", "so", "some", "such",
    "than", "that", "that's", "the", "their", "theirs", "them", "themselves",
    "then", "there", "there's", "these", "they", "they'd", "they'll",
    "they're", "they've", "this", "those", "through", "to", "too", "under",
    "until", "up", "very", "was", "wasn't", "we", "we'd", "we'll", "we're",
    "we've", "were", "weren't", "what", "what's", "when", "when's", "where",
    "where's", "which", "while", "who", "who's", "whom", "why", "why's",
    "with", "won't", "would", "wouldn't", "you", "you'd", "you'll", "you're",
    "you've", "your", "yours", "yourself", "yourselves",
})


def _is_kept(char: str) -> bool:
    return char.isalnum() or char in TOKEN_EDGE_KEEP


def clean_token(token: str) -> str:
    """
    Trim non-alphanumeric edges from a token and lowercase it.

    Interior punctuation is kept ("don't" stays "don't"); "=", "-" and "²"
    also survive at the edges.

    Example:
        >>> clean_token('"E=mc²!"')
        'e=mc²'
    """
    start, end = 0, len(token)
    while start < end and not _is_kept(token[start]):
        start += 1
    while end > start and not _is_kept(token[end - 1]):
        end -= 1
    return token[start:end].lower()


class ConceptFocuser:
    """
    Semantic distillation of raw text into concept n-grams.

    Stateless: the stop-word set is a module-level constant, so a single
    instance can be shared freely between threads.

    Example:
        >>> focuser = ConceptFocuser()
        >>> sorted(focuser.distill_concepts("The sky is blue"))
        ['blue', 'sky', 'sky blue']
    """

    @staticmethod
    def stop_words() -> frozenset:
        """The static bilingual stop-word set."""
        return STOP_WORDS

    def tokenize(self, text: str) -> List[str]:
        """Whitespace tokenization with edge trimming and stop-word removal."""
        words = []
        for raw in text.split():
            word = clean_token(raw)
            if word and word not in STOP_WORDS:
                words.append(word)
        return words

    def distill_concepts(self, text: str) -> Set[str]:
        """
        Distill unigram, bigram and trigram concepts from text.

        Args:
            text: Arbitrary input text

        Returns:
            Unordered set of concepts (empty for empty/all-stop-word text)
        """
        words = self.tokenize(text)
        concepts: Set[str] = set()

        for i, word in enumerate(words):
            if len(word) >= MIN_UNIGRAM_LENGTH:
                concepts.add(word)
            if i + 1 < len(words):
                concepts.add(f"{word} {words[i + 1]}")
            if i + 2 < len(words):
                concepts.add(f"{word} {words[i + 1]} {words[i + 2]}")

        return concepts

    def __repr__(self) -> str:
        return f"ConceptFocuser(stop_words={len(STOP_WORDS)})"
