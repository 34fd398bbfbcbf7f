"""
Encoding and retrieval constants.

Values mirror the behaviour of the holographic encoder; changing them
changes the vectors produced for the same text.
"""

# Vector Space Configuration
DEFAULT_DIMENSIONS = 256
"""Default number of complex components per trace vector."""

MIN_DIMENSIONS = 1
MAX_DIMENSIONS = 100000

NORMALIZATION_EPSILON = 1e-9
"""Floor applied to a norm before dividing by it. Keeps all-zero vectors
at zero instead of turning them into NaN."""

# Q1.15 Fixed-Point Storage
Q15_SCALE = 32767.0
"""2^15 - 1. One unit in Q1.15 is 1 / Q15_SCALE."""

Q15_MIN = -1.0
Q15_MAX = 0.99997
"""Representable range of a Q1.15 value."""

INT16_MIN = -32768
INT16_MAX = 32767

# Concept Focusing
MIN_UNIGRAM_LENGTH = 3
"""Single tokens shorter than this are only kept inside bigrams/trigrams."""

TOKEN_EDGE_KEEP = frozenset("=-²")
"""Non-alphanumeric characters that survive token edge trimming
(so that "e=mc²" and "x-ray" stay intact)."""

# TF-IDF
DEFAULT_IDF = 1.0
"""IDF used before any document-frequency table has been built."""

# Reference Waves
AXIS_PREFIX = "__AXIS_"
"""Concept-name prefix used to derive default semantic axis vectors."""

WAVE_CACHE_SIZE = 4096
"""Maximum number of memoized reference waves per codebook."""

# Seeded Traces
SEEDED_TRACE_COMPLEXITY = 10
"""Length of the random identity vector given to new hierarchy nodes."""

SEEDED_RELEVANCE = 1.0

# Retrieval
DEFAULT_TOP_K = 5

LOGGED_SEARCH_RESULTS = 5
"""Number of raw (pre-dedup) search results written to the debug log."""

# Prompt Classification
CLASSIFIER_CONFIDENCE_THRESHOLD = 0.05
"""Best prototype similarity must exceed this, otherwise AMBIGUOUS."""

# Lemmatization
MIN_LEMMATIZE_LENGTH = 4
"""Words shorter than this are returned unchanged by the lemmatizer."""

# File Persistence
DEFAULT_PERSIST_PATH = "./data/holomem"
"""Default directory for saved memories and hierarchies."""

FORMAT_VERSION = 1
"""Version tag written into every persisted file."""
