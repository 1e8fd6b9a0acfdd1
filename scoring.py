"""
SEO Scoring Engine for blog post evaluation.

Every check scores on a 0-10 scale. Meta-tag checks start at 10 and subtract
penalties without a floor, so stacked penalties can go below zero. The overall
score is the weighted composite on a 0-100 scale.
"""

import math
import re
from dataclasses import dataclass
from typing import Any, Optional

from config import GUIDELINES, THRESHOLDS, WEIGHTS
from documents import Document
from metrics import (
    count_headings,
    count_paragraphs,
    count_words,
    keyword_density,
    readability_score,
)

IMG_RE = re.compile(r'<img[^>]+>')
IMG_WITH_ALT_RE = re.compile(r'''<img[^>]+alt=["'][^"']*["'][^>]*>''')
LINK_RE = re.compile(r'''<a[^>]+href=["'][^"']*["'][^>]*>.*?</a>''')
SLUG_RE = re.compile(r'[a-z0-9-]+')
DESCRIPTION_SENTENCE_RE = re.compile(r'[A-Z].*[.!?]')


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


@dataclass
class ScoreDimension:
    value: Any
    score: float
    recommendation: Optional[str] = None

    def to_dict(self, with_count: bool = False) -> dict:
        data = {"value": self.value, "score": round(self.score, 2)}
        if with_count:
            data["count"] = self.value
        if self.recommendation:
            data["recommendation"] = self.recommendation
        return data


@dataclass
class AnalysisResult:
    score: int
    recommendations: list[str]
    keyword_density: dict[str, float]
    meta_tags: dict[str, ScoreDimension]
    content_analysis: dict[str, ScoreDimension]
    readability_score: float
    technical_seo: dict[str, ScoreDimension]
    slug: str = ""

    def to_dict(self) -> dict:
        # Content dimensions and internal links measure counts.
        content = {k: d.to_dict(with_count=True) for k, d in self.content_analysis.items()}
        content["readability_score"] = round(self.readability_score, 2)
        technical = {k: d.to_dict(with_count=(k == "internal_links")) for k, d in self.technical_seo.items()}
        return {
            "score": self.score,
            "recommendations": list(self.recommendations),
            "keyword_density": dict(self.keyword_density),
            "meta_tags": {k: d.to_dict() for k, d in self.meta_tags.items()},
            "content_analysis": content,
            "technical_seo": technical,
        }

    def summary(self) -> str:
        label = f" [{self.slug}]" if self.slug else ""
        lines = [f"═══ SEO SCORE{label}: {self.score}/100 ═══", ""]
        rows = [
            ("Title", self.meta_tags["title"].score),
            ("Description", self.meta_tags["description"].score),
            ("Keywords", self.meta_tags["keywords"].score),
            ("Word count", self.content_analysis["word_count"].score),
            ("Headings", self.content_analysis["headings"].score),
            ("Paragraphs", self.content_analysis["paragraphs"].score),
            ("Readability", self.readability_score),
            ("Slug", self.technical_seo["slug_optimization"].score),
            ("Image alt text", self.technical_seo["image_alt"].score),
            ("Internal links", self.technical_seo["internal_links"].score),
        ]
        for name, score in rows:
            bar_len = max(0, min(20, int(score * 2)))
            bar = "█" * bar_len + "░" * (20 - bar_len)
            lines.append(f"  {name:<16} {bar} {score:.1f}/10")
        if self.recommendations:
            lines.append("")
            lines.append("  RECOMMENDATIONS:")
            for rec in self.recommendations:
                lines.append(f"    → {rec}")
        return "\n".join(lines)


# ── Meta tags ────────────────────────────────────────────────────────────

def score_title(title: str) -> ScoreDimension:
    low, high = GUIDELINES["ideal_title_length"]
    length = len(title)
    score = 10
    messages = []
    if length < low:
        score -= 3
        messages.append(f"Title is too short ({length} chars). Aim for {low}-{high} characters.")
    elif length > high:
        score -= 2
        messages.append(f"Title is too long ({length} chars). Aim for {low}-{high} characters.")

    if not re.match(r'[A-Z]', title):
        score -= 1
        messages.append("Capitalize the first letter of your title.")

    return ScoreDimension(value=title, score=score, recommendation=" ".join(messages) or None)


def score_description(description: str) -> ScoreDimension:
    low, high = GUIDELINES["ideal_description_length"]
    length = len(description)
    score = 10
    messages = []
    if length < low:
        score -= 3
        messages.append(f"Description is too short ({length} chars). Aim for {low}-{high} characters.")
    elif length > high:
        score -= 2
        messages.append(f"Description is too long ({length} chars). Aim for {low}-{high} characters.")

    if not DESCRIPTION_SENTENCE_RE.fullmatch(description):
        score -= 1
        messages.append("Format your description as a complete sentence.")

    return ScoreDimension(value=description, score=score, recommendation=" ".join(messages) or None)


def score_keywords(keywords: list[str]) -> ScoreDimension:
    count = len(keywords)
    score = 10
    messages = []
    if count == 0:
        score = 0
        messages.append("No keywords defined. Add relevant keywords for better SEO.")
    elif count < THRESHOLDS["keyword_count_min"]:
        score -= 3
        messages.append(f"Only {count} keywords defined. Add more relevant keywords (aim for 5-8).")
    elif count > THRESHOLDS["keyword_count_max"]:
        score -= 2
        messages.append(f"Too many keywords ({count}). Focus on 5-8 most relevant ones.")

    single_word = [k for k in keywords if len(k.split(" ")) == 1]
    if len(single_word) == count and count > 2:
        score -= 2
        messages.append("Include some long-tail keywords (phrases) for better targeting.")

    return ScoreDimension(value=list(keywords), score=score, recommendation=" ".join(messages) or None)


# ── Technical SEO ────────────────────────────────────────────────────────

def score_slug(slug: str) -> ScoreDimension:
    max_length = THRESHOLDS["max_slug_length"]
    score = 10
    messages = []
    if len(slug) > max_length:
        score -= 2
        messages.append(f"URL slug is too long. Keep it under {max_length} characters.")
    if not SLUG_RE.fullmatch(slug):
        score -= 3
        messages.append("URL slug contains invalid characters. Use only lowercase letters, numbers, and hyphens.")
    if "--" in slug:
        score -= 1
        messages.append("Avoid consecutive hyphens in the URL slug.")
    return ScoreDimension(value=slug, score=score, recommendation=" ".join(messages) or None)


def score_image_alt(content: str) -> ScoreDimension:
    images = IMG_RE.findall(content)
    if not images:
        return ScoreDimension(value=0, score=10)

    with_alt = IMG_WITH_ALT_RE.findall(content)
    score = round_half_up((len(with_alt) / len(images)) * 10)
    recommendation = None
    if score < 10:
        missing = len(images) - len(with_alt)
        recommendation = f"{missing} image(s) missing alt text. Add descriptive alt attributes to all images."
    return ScoreDimension(value=len(images), score=score, recommendation=recommendation)


def score_internal_links(content: str) -> ScoreDimension:
    count = len(LINK_RE.findall(content))
    if count == 0:
        return ScoreDimension(value=0, score=5,
                              recommendation="No internal links found. Add links to related content for better SEO.")
    if count == 1:
        return ScoreDimension(value=1, score=7,
                              recommendation="Only one internal link found. Consider adding more links to related content.")
    return ScoreDimension(value=count, score=10)


# ── Content ──────────────────────────────────────────────────────────────

def word_count_score(word_count: int) -> float:
    low = GUIDELINES["min_word_count"]
    high = GUIDELINES["max_word_count"]
    ideal = GUIDELINES["ideal_word_count"]
    if word_count < low:
        return (word_count / low) * 7
    if word_count > high:
        return 7 - min(2, ((word_count - high) / high) * 3)
    distance = abs(word_count - ideal) / (high - low)
    return 10 - distance * 3


def headings_score(heading_count: int) -> float:
    low = GUIDELINES["min_headings"]
    if heading_count < low:
        return (heading_count / low) * 7
    return min(10, 7 + (heading_count - low))


def paragraphs_score(paragraph_count: int, word_count: int) -> float:
    avg_words = word_count / (paragraph_count or 1)
    if paragraph_count < THRESHOLDS["min_paragraphs"]:
        return 5
    if avg_words > THRESHOLDS["max_words_per_paragraph"]:
        return 6
    if avg_words < THRESHOLDS["min_words_per_paragraph"]:
        return 7
    return 10


def content_score(word_count: int, heading_count: int, paragraph_count: int, readability: float) -> float:
    w = WEIGHTS["content"]
    score = (word_count_score(word_count) * w["word_count"]
             + headings_score(heading_count) * w["headings"]
             + paragraphs_score(paragraph_count, word_count) * w["paragraphs"]
             + readability * w["readability"])
    return min(10, max(0, score))


def word_count_recommendation(word_count: int) -> Optional[str]:
    if word_count < GUIDELINES["min_word_count"]:
        return f"Increase your content length to at least {GUIDELINES['min_word_count']} words for better SEO."
    if word_count > GUIDELINES["max_word_count"]:
        return f"Consider breaking this content into multiple posts as it exceeds {GUIDELINES['max_word_count']} words."
    return None


def headings_recommendation(heading_count: int) -> Optional[str]:
    if heading_count < GUIDELINES["min_headings"]:
        return f"Add more headings to structure your content. Aim for at least {GUIDELINES['min_headings']}."
    return None


# ── Aggregation ──────────────────────────────────────────────────────────

def technical_score(slug: ScoreDimension, image_alt: ScoreDimension, internal_links: ScoreDimension) -> float:
    return (slug.score + image_alt.score + internal_links.score) / 3


def overall_score(title: float, description: float, keywords: float, content: float, technical: float) -> int:
    w = WEIGHTS["overall"]
    weighted = (title * w["title"]
                + description * w["description"]
                + keywords * w["keywords"]
                + content * w["content"]
                + technical * w["technical"])
    return min(100, max(0, round_half_up(weighted * 10)))


def build_recommendations(
    meta_tags: dict[str, ScoreDimension],
    word_count: int,
    heading_count: int,
    densities: dict[str, float],
    link_count: int,
    readability: float,
) -> list[str]:
    recommendations = []
    cutoff = THRESHOLDS["meta_recommendation_below"]
    for key in ("title", "description", "keywords"):
        dim = meta_tags[key]
        if dim.score < cutoff and dim.recommendation:
            recommendations.append(dim.recommendation)

    for rec in (word_count_recommendation(word_count), headings_recommendation(heading_count)):
        if rec:
            recommendations.append(rec)

    low, high = GUIDELINES["keyword_density"]
    targets = meta_tags["keywords"].value
    for keyword, density in densities.items():
        if density > high:
            recommendations.append(
                f'Keyword "{keyword}" appears too frequently ({density}%). Reduce usage to avoid keyword stuffing.')
        elif density < low and keyword in targets:
            recommendations.append(f'Increase usage of keyword "{keyword}" from {density}% to at least {low}%.')

    if link_count < THRESHOLDS["min_internal_links"]:
        recommendations.append("Add more internal links to related content to improve SEO and user experience.")

    if readability < THRESHOLDS["readability_low"]:
        recommendations.append(
            "Content readability is low. Use shorter sentences and simpler words to improve readability.")
    elif readability < THRESHOLDS["readability_fair"]:
        recommendations.append(
            "Consider improving content readability by using simpler language and shorter paragraphs.")

    return recommendations


def analyze_document(document: Document) -> AnalysisResult:
    content = document.content
    keywords = list(document.seo_keywords or [])

    word_count = count_words(content)
    heading_count = count_headings(content)
    paragraph_count = count_paragraphs(content)
    readability = readability_score(content)
    densities = keyword_density(content, keywords)

    meta_tags = {
        "title": score_title(document.seo_title),
        "description": score_description(document.seo_description),
        "keywords": score_keywords(keywords),
    }
    technical_seo = {
        "slug_optimization": score_slug(document.slug),
        "image_alt": score_image_alt(content),
        "internal_links": score_internal_links(content),
    }
    content_analysis = {
        "headings": ScoreDimension(
            value=heading_count,
            score=headings_score(heading_count),
            recommendation=headings_recommendation(heading_count),
        ),
        "paragraphs": ScoreDimension(
            value=paragraph_count,
            score=paragraphs_score(paragraph_count, word_count),
            recommendation=("Consider breaking your content into more paragraphs for better readability."
                            if paragraph_count < THRESHOLDS["paragraph_recommendation_below"] else None),
        ),
        "word_count": ScoreDimension(
            value=word_count,
            score=word_count_score(word_count),
            recommendation=word_count_recommendation(word_count),
        ),
    }

    content_total = content_score(word_count, heading_count, paragraph_count, readability)
    technical_total = technical_score(
        technical_seo["slug_optimization"],
        technical_seo["image_alt"],
        technical_seo["internal_links"],
    )
    score = overall_score(
        meta_tags["title"].score,
        meta_tags["description"].score,
        meta_tags["keywords"].score,
        content_total,
        technical_total,
    )
    recommendations = build_recommendations(
        meta_tags, word_count, heading_count, densities,
        technical_seo["internal_links"].value, readability,
    )

    return AnalysisResult(
        score=score,
        recommendations=recommendations,
        keyword_density=densities,
        meta_tags=meta_tags,
        content_analysis=content_analysis,
        readability_score=readability,
        technical_seo=technical_seo,
        slug=document.slug,
    )
