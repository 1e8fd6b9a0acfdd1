"""
Content metrics and readability estimation for blog post bodies.

Bodies may mix HTML and markdown. Headings and paragraphs are counted with
plain regular expressions, so a document that mixes both syntaxes can be
counted twice; downstream score thresholds are tuned against that behaviour.
"""

import re

from config import READABILITY

TAG_RE = re.compile(r'<[^>]*>')
HEADING_RE = re.compile(r'<h[1-6][^>]*>.*?</h[1-6]>|^#{1,6}\s+.+$', re.MULTILINE)
PARAGRAPH_RE = re.compile(r'<p[^>]*>.*?</p>|^[^#<>\n].+$', re.MULTILINE)
SENTENCE_SPLIT_RE = re.compile(r'[.!?]+')
LETTER_RE = re.compile(r'[a-zA-Z]')
VOWEL_GROUP_RE = re.compile(r'[aeiouy]+')


def strip_html(text: str) -> str:
    return TAG_RE.sub('', text)


def count_words(text: str) -> int:
    return len(text.split())


def count_headings(content: str) -> int:
    return len(HEADING_RE.findall(content))


def count_paragraphs(content: str) -> int:
    return len(PARAGRAPH_RE.findall(content))


def keyword_density(content: str, keywords: list[str]) -> dict[str, float]:
    """Percentage of words that are whole-word matches of each keyword.

    Matching is case-insensitive and runs against the tag-stripped body.
    Returns an empty mapping when the body has no words.
    """
    clean = strip_html(content).lower()
    total_words = count_words(clean)
    if total_words == 0:
        return {}

    densities = {}
    for keyword in keywords:
        pattern = r'\b' + re.escape(keyword.lower()) + r'\b'
        matches = len(re.findall(pattern, clean, re.ASCII))
        densities[keyword] = round((matches / total_words) * 100, 2)
    return densities


def extract_sentences(text: str) -> list[str]:
    return [s for s in SENTENCE_SPLIT_RE.split(text) if s.strip()]


def extract_words(text: str) -> list[str]:
    return [w for w in text.split() if LETTER_RE.search(w)]


def estimate_syllables(word: str) -> int:
    word = word.lower()
    # silent trailing e, except "-le" endings
    if len(word) > 2 and word.endswith('e') and not word.endswith('le'):
        word = word[:-1]
    groups = VOWEL_GROUP_RE.findall(word)
    return len(groups) if groups else 1


def readability_score(content: str) -> float:
    """Flesch reading-ease approximation rescaled to 0-10."""
    clean = strip_html(content)
    sentences = extract_sentences(clean)
    words = extract_words(clean)
    if not sentences or not words:
        return 0

    avg_sentence_length = len(words) / len(sentences)
    syllables = sum(estimate_syllables(w) for w in words)
    avg_syllables_per_word = syllables / len(words)

    raw = (READABILITY["base"]
           - READABILITY["sentence_weight"] * avg_sentence_length
           - READABILITY["syllable_weight"] * avg_syllables_per_word)
    return min(10, max(0, raw / 10))


def content_metrics(content: str) -> dict:
    return {
        "word_count": count_words(content),
        "heading_count": count_headings(content),
        "paragraph_count": count_paragraphs(content),
    }
