"""
Configuration for the blog SEO scoring engine
"""

import os

GUIDELINES = {
    "min_word_count": 300,
    "ideal_word_count": 1200,
    "max_word_count": 2500,
    "min_headings": 3,
    "ideal_title_length": (50, 60),
    "ideal_description_length": (140, 160),
    "keyword_density": (0.5, 2.5),
}

WEIGHTS = {
    "overall": {
        "title": 0.15,
        "description": 0.15,
        "keywords": 0.10,
        "content": 0.40,
        "technical": 0.20,
    },
    "content": {
        "word_count": 0.3,
        "headings": 0.3,
        "paragraphs": 0.2,
        "readability": 0.2,
    },
}

THRESHOLDS = {
    "meta_recommendation_below": 7,
    "min_paragraphs": 3,
    "paragraph_recommendation_below": 5,
    "max_words_per_paragraph": 150,
    "min_words_per_paragraph": 30,
    "max_slug_length": 75,
    "min_internal_links": 2,
    "readability_low": 4,
    "readability_fair": 6,
    "optimize_below": 70,
    "keyword_count_min": 3,
    "keyword_count_max": 10,
}

READABILITY = {
    "base": 206.835,
    "sentence_weight": 1.015,
    "syllable_weight": 84.6,
}

FALLBACK_KEYWORDS = [
    {"pattern": "{topic}", "search_volume": "10K-100K", "difficulty": "High", "relevance": 10},
    {"pattern": "best {topic}", "search_volume": "1K-10K", "difficulty": "Medium", "relevance": 9},
    {"pattern": "{topic} guide", "search_volume": "1K-10K", "difficulty": "Medium", "relevance": 8},
    {"pattern": "how to use {topic}", "search_volume": "1K-10K", "difficulty": "Low", "relevance": 8},
    {"pattern": "{topic} tutorial", "search_volume": "1K-10K", "difficulty": "Medium", "relevance": 7},
    {"pattern": "{topic} for beginners", "search_volume": "500-1K", "difficulty": "Low", "relevance": 7},
    {"pattern": "advanced {topic} techniques", "search_volume": "100-500", "difficulty": "Low", "relevance": 6},
    {"pattern": "{topic} vs alternatives", "search_volume": "500-1K", "difficulty": "Medium", "relevance": 6},
    {"pattern": "{topic} benefits", "search_volume": "500-1K", "difficulty": "Low", "relevance": 5},
    {"pattern": "{topic} examples", "search_volume": "500-1K", "difficulty": "Low", "relevance": 5},
]

META_FALLBACK = {
    "max_title_length": 60,
    "max_description_length": 155,
    "keyword_source_chars": 500,
    "min_keyword_length": 4,
    "max_keywords": 8,
    "ellipsis": "...",
}

STOP_WORDS = frozenset([
    "the", "and", "or", "but", "in", "on", "at", "to", "for",
    "with", "by", "a", "an", "is", "was", "be", "are",
])

SITEMAP = {
    "static_pages": [
        {"path": "", "changefreq": "daily", "priority": "1.0"},
        {"path": "/blog", "changefreq": "daily", "priority": "0.9"},
        {"path": "/features", "changefreq": "weekly", "priority": "0.8"},
        {"path": "/pricing", "changefreq": "weekly", "priority": "0.8"},
        {"path": "/about", "changefreq": "weekly", "priority": "0.8"},
        {"path": "/contact", "changefreq": "weekly", "priority": "0.8"},
    ],
    "post_changefreq": "monthly",
    "post_priority": "0.7",
}

ROBOTS = {
    "disallow": ["/admin/", "/api/", "/private/", "/account/"],
    "allow": ["/blog/", "/features/", "/pricing/"],
}

PUBLISHER = {
    "name": "Jarvis AI Instagram Agent",
    "logo_path": "/logo.png",
}

AI = {
    "model": os.environ.get("SEO_AI_MODEL", "claude-sonnet-4-5-20250929"),
    "max_tokens": int(os.environ.get("SEO_AI_MAX_TOKENS", "2048")),
    "content_preview_chars": 1000,
}

OUTPUT = {
    "dir": "output",
    "report_name": "seo_report_{timestamp}.json",
}
