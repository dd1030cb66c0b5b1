"""Stopword tables for keyword and topic extraction.

The tokenizer only emits ASCII terms of 3+ characters, so both tables are
lists of English words. ``en`` also drops the fillers typical of questions
asked to an assistant; ``zh`` users mostly type English for technical terms
only, so it keeps to function words.
"""

from typing import FrozenSet

# Words produced by masking placeholders ([PATH] -> "path", ...).
PLACEHOLDER_WORDS = frozenset(["path", "url", "email", "secret", "truncated"])

_FUNCTION_WORDS = """
the and for are but not you all any can had her was one our out has him his how its
may now see who did let put say she too also been from have here into just more most
much must only over same some such than that them then there these they this those
very what when where which while will with would your about above after again against
because before being below between both could does doing down during each few further
herself himself itself myself once other ought ours ourselves own should their theirs
themselves through under until were yours yourself yourselves why whom whose off nor
yet via per
""".split()

# "don't" tokenizes to "don", "isn't" to "isn", ...
_CONTRACTION_STEMS = """
don doesn didn isn aren wasn weren won can couldn shouldn wouldn haven hasn
""".split()

_QUESTION_FILLERS = """
want need help please thanks thank know way ways use using used uses get got getting
make makes making like something anything everything thing things still even really
actually maybe able trying try tried give gives show shows tell explain example
examples possible work works working done instead without within another well
better best good new
""".split()

ZH_STOPWORDS: FrozenSet[str] = (
    frozenset(_FUNCTION_WORDS) | frozenset(_CONTRACTION_STEMS) | PLACEHOLDER_WORDS
)
EN_STOPWORDS: FrozenSet[str] = ZH_STOPWORDS | frozenset(_QUESTION_FILLERS)

STOPWORDS = {
    "en": EN_STOPWORDS,
    "zh": ZH_STOPWORDS,
}


def get_stopwords(language: str = "en") -> FrozenSet[str]:
    """Return the stopword set for ``language``; unknown tags use English."""
    return STOPWORDS.get(language, EN_STOPWORDS)
