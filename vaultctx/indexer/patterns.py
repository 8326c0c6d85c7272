"""Markdown pattern matching used by the context compactor.

Every function here works on raw note text. Line-anchored patterns use
``re.MULTILINE`` so ``^`` matches at the start of every line.
"""

import re

STOPWORDS = frozenset(
    {
        "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
        "of", "with", "by", "from", "as", "is", "was", "are", "were", "been",
        "be", "being", "have", "has", "had", "having", "do", "does", "did",
        "doing", "done", "will", "would", "could", "should", "may", "might",
        "must", "shall", "can", "need", "that", "this", "these", "those", "it",
        "its", "itself", "i", "me", "myself", "you", "yourself", "he", "him",
        "himself", "she", "herself", "we", "us", "ourselves", "they", "them",
        "themselves", "what", "which", "who", "whom", "whose", "how", "when",
        "where", "why", "whether", "all", "each", "every", "both", "few",
        "more", "most", "less", "least", "many", "much", "other", "another",
        "some", "such", "no", "nor", "not", "only", "own", "same", "so",
        "than", "too", "very", "just", "also", "now", "here", "there", "then",
        "if", "because", "about", "into", "through", "during", "before",
        "after", "above", "below", "between", "under", "over", "again",
        "further", "once", "any", "your", "yours", "my", "mine", "his", "her",
        "hers", "their", "theirs", "our", "ours", "up", "down", "out", "off",
        "while", "until", "against", "among", "within", "without", "upon",
        "onto", "toward", "towards", "across", "along", "around", "behind",
        "beyond", "since", "though", "although", "unless", "yet", "still",
        "even", "ever", "never", "always", "often", "already", "however",
        "therefore", "thus", "else", "etc", "via", "per", "let", "get", "got",
        "can't", "don't", "doesn't", "isn't", "it's", "i'm", "i've", "won't",
    }
)

_MARKDOWN_PUNCTUATION = re.compile(r"[#\[\]`*_~]")
_WHITESPACE = re.compile(r"\s+")

# "# Title", "### Sub" -> header text only
_HEADER_TEXT = re.compile(r"^#+\s+(.+)$", re.MULTILINE)

# [[Target]] or [[Target|Alias]]; group 1 is the target
_WIKI_LINK = re.compile(r"\[\[([^\]|]+)(?:\|[^\]]+)?\]\]")

# '#' then a letter, then letters, digits, '_' or '-'
_TAG = re.compile(r"#[a-zA-Z][a-zA-Z0-9_-]*")

# Two or more capitalized words separated by whitespace
_CAPITALIZED_PHRASE = re.compile(r"\b[A-Z][a-z]+(?:\s+[A-Z][a-z]+)+\b")

_SENTENCE_BREAK = re.compile(r"[.!?]+")

# Optional indentation, then -, * or +, then a whitespace character
_BULLET_LINE = re.compile(r"^\s*[-*+]\s", re.MULTILINE)

# One or more '#' followed by whitespace at line start
_HEADER_LINE = re.compile(r"^#+\s", re.MULTILINE)

CODE_FENCE = "```"


def tokenize(text: str) -> list[str]:
    """Split text into words after blanking out markdown punctuation."""
    return [w for w in _WHITESPACE.split(_MARKDOWN_PUNCTUATION.sub(" ", text)) if w]


def extract_headers(content: str) -> list[str]:
    return _HEADER_TEXT.findall(content)


def extract_wiki_links(content: str) -> list[str]:
    """Wiki links normalized to ``[[Target]]``, aliases dropped."""
    return [f"[[{target}]]" for target in _WIKI_LINK.findall(content)]


def extract_tags(content: str) -> list[str]:
    return _TAG.findall(content)


def extract_capitalized_phrases(content: str) -> list[str]:
    return _CAPITALIZED_PHRASE.findall(content)


def split_sentences(content: str) -> list[str]:
    """Sentence fragments, blank fragments discarded."""
    return [s for s in _SENTENCE_BREAK.split(content) if s.strip()]


def count_bullet_lines(content: str) -> int:
    return len(_BULLET_LINE.findall(content))


def count_header_lines(content: str) -> int:
    return len(_HEADER_LINE.findall(content))


def count_code_blocks(content: str) -> float:
    """Approximate fenced code block count (two fences per block)."""
    return content.count(CODE_FENCE) / 2
