#!/usr/bin/env python3
"""
Blog SEO Optimizer — analysis and meta tag optimization for blog posts

Usage:
    python optimizer.py analyze --input posts/instagram-reels-guide.md
    python optimizer.py optimize --input posts/instagram-reels-guide.md --write
    python optimizer.py keywords --topic "instagram marketing" --count 5
    python optimizer.py --offline meta-tags --input posts/instagram-reels-guide.md
    python optimizer.py fill --input posts/new-post.md --write
"""

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

from config import THRESHOLDS
from documents import (
    Document,
    DocumentNotFound,
    InMemoryDocumentStore,
    load_document,
    require_document,
    update_frontmatter,
)
from scoring import AnalysisResult, analyze_document
from suggestions import (
    OfflineGenerator,
    TextGenerator,
    suggest_keywords,
    suggest_meta_tags,
)

logger = logging.getLogger(__name__)

META_FIELDS = {
    "title": "seo_title",
    "description": "seo_description",
    "keywords": "seo_keywords",
}


def analyze_blog_post(store: InMemoryDocumentStore, post_id: int) -> AnalysisResult:
    document = require_document(store, post_id)
    return analyze_document(document)


def optimize_blog_post(store: InMemoryDocumentStore, post_id: int,
                       generator: Optional[TextGenerator] = None) -> Document:
    """Replace weak SEO meta tags on a stored post.

    Posts scoring at or above the optimize threshold are returned untouched.
    Otherwise each of title, description and keywords scoring below the meta
    recommendation cutoff is overwritten with a fresh suggestion.
    """
    document = require_document(store, post_id)
    analysis = analyze_document(document)
    if analysis.score >= THRESHOLDS["optimize_below"]:
        return document

    weak = [name for name, dim in analysis.meta_tags.items()
            if dim.score < THRESHOLDS["meta_recommendation_below"]]
    if not weak:
        return document

    suggestion = suggest_meta_tags(document.title, document.content, generator)
    updates = {META_FIELDS[name]: getattr(suggestion, name) for name in weak}
    logger.info(f"Optimizing post {post_id}: score {analysis.score}, updating {', '.join(sorted(updates))}")
    updated = store.update(post_id, **updates)
    return updated or document


def fill_missing_meta_tags(document: Document, generator: Optional[TextGenerator] = None) -> Document:
    if document.seo_title and document.seo_description and document.seo_keywords:
        return document

    suggestion = suggest_meta_tags(document.title, document.content, generator)
    return replace(
        document,
        seo_title=document.seo_title or suggestion.title,
        seo_description=document.seo_description or suggestion.description,
        seo_keywords=list(document.seo_keywords) or suggestion.keywords,
    )


def _load_into_store(path: str) -> tuple[InMemoryDocumentStore, Document]:
    input_path = Path(path)
    if not input_path.exists():
        print(f"Error: {input_path} not found")
        sys.exit(1)
    try:
        document = load_document(input_path)
    except ValueError as e:
        print(f"Error: {input_path}: {e}")
        sys.exit(1)
    store = InMemoryDocumentStore()
    return store, store.add(document)


def cmd_analyze(args, generator):
    store, document = _load_into_store(args.input)
    analysis = analyze_blog_post(store, document.id)
    if args.json:
        print(json.dumps(analysis.to_dict(), indent=2))
    else:
        print(f"\n{analysis.summary()}\n")


def _changed_fields(before: Document, after: Document) -> dict:
    return {field_name: getattr(after, field_name) for field_name in META_FIELDS.values()
            if getattr(after, field_name) != getattr(before, field_name)}


def _print_and_write(args, before: Document, after: Document):
    changes = _changed_fields(before, after)
    for name, field_name in META_FIELDS.items():
        if field_name in changes:
            print(f"\n  {name}:")
            print(f"    - {getattr(before, field_name)}")
            print(f"    + {changes[field_name]}")

    if args.write and changes:
        path = Path(args.input)
        try:
            text = update_frontmatter(path.read_text(encoding="utf-8"), changes)
        except ValueError as e:
            print(f"Error: {path}: {e}")
            sys.exit(1)
        path.write_text(text, encoding="utf-8")
        print(f"\n  Updated: {args.input}")
    print()


def cmd_optimize(args, generator):
    store, document = _load_into_store(args.input)
    before = analyze_blog_post(store, document.id)
    optimized = optimize_blog_post(store, document.id, generator)
    after = analyze_blog_post(store, document.id)

    print(f"\n  Score before: {before.score}/100")
    print(f"  Score after:  {after.score}/100 ({after.score - before.score:+d})")
    _print_and_write(args, document, optimized)


def cmd_fill(args, generator):
    _, document = _load_into_store(args.input)
    filled = fill_missing_meta_tags(document, generator)
    if filled is document:
        print("\n  All meta tags already set.\n")
        return
    _print_and_write(args, document, filled)


def cmd_keywords(args, generator):
    suggestions = suggest_keywords(args.topic, args.count, generator)
    if args.json:
        print(json.dumps([s.to_dict() for s in suggestions], indent=2))
        return
    print(f"\n  KEYWORD SUGGESTIONS: {args.topic}\n")
    for s in suggestions:
        print(f"  {s.keyword:<40} {s.search_volume:>10}  {s.difficulty:<8} {s.relevance}")
    print()


def cmd_meta_tags(args, generator):
    _, document = _load_into_store(args.input)
    suggestion = suggest_meta_tags(document.title, document.content, generator)
    print(json.dumps(suggestion.to_dict(), indent=2))


def main(argv=None):
    parser = argparse.ArgumentParser(description="SEO analysis and optimization for blog posts")
    parser.add_argument("--offline", action="store_true", help="Skip AI generation and use fallback suggestions")
    parser.add_argument("--quiet", action="store_true", help="Only log warnings and errors")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("analyze", help="Score a markdown blog post")
    p.add_argument("--input", required=True, help="Markdown file with YAML frontmatter")
    p.add_argument("--json", action="store_true", help="Print the full analysis as JSON")
    p.set_defaults(func=cmd_analyze)

    p = sub.add_parser("optimize", help="Regenerate weak meta tags")
    p.add_argument("--input", required=True, help="Markdown file with YAML frontmatter")
    p.add_argument("--write", action="store_true", help="Write updated frontmatter back to the file")
    p.set_defaults(func=cmd_optimize)

    p = sub.add_parser("fill", help="Fill empty meta tags on a new post")
    p.add_argument("--input", required=True, help="Markdown file with YAML frontmatter")
    p.add_argument("--write", action="store_true", help="Write the filled meta tags back to the file")
    p.set_defaults(func=cmd_fill)

    p = sub.add_parser("keywords", help="Suggest keywords for a topic")
    p.add_argument("--topic", required=True)
    p.add_argument("--count", type=int, default=10)
    p.add_argument("--json", action="store_true")
    p.set_defaults(func=cmd_keywords)

    p = sub.add_parser("meta-tags", help="Suggest meta tags for a post")
    p.add_argument("--input", required=True, help="Markdown file with YAML frontmatter")
    p.set_defaults(func=cmd_meta_tags)

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.WARNING if args.quiet else logging.INFO)

    generator = OfflineGenerator() if args.offline else None
    try:
        args.func(args, generator)
    except DocumentNotFound as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
