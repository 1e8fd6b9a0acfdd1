#!/usr/bin/env python3
"""
Batch runner — score every blog post in a directory.

Usage:
    python batch.py --input-dir posts
    python batch.py --input-dir posts --optimize --output output/report.json
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

from config import OUTPUT
from documents import InMemoryDocumentStore, load_documents
from optimizer import analyze_blog_post, optimize_blog_post
from suggestions import OfflineGenerator


def run_batch(store: InMemoryDocumentStore, optimize: bool = False, generator=None) -> list[dict]:
    results = []
    for document in store.all():
        before = analyze_blog_post(store, document.id)
        entry = {
            "id": document.id,
            "slug": document.slug,
            "score": before.score,
            "recommendations": before.recommendations,
        }
        if optimize:
            optimize_blog_post(store, document.id, generator)
            entry["optimized_score"] = analyze_blog_post(store, document.id).score
        results.append(entry)
    return results


def main(argv=None):
    parser = argparse.ArgumentParser(description="Batch SEO scoring for blog posts")
    parser.add_argument("--input-dir", required=True, help="Directory of markdown posts")
    parser.add_argument("--optimize", action="store_true", help="Also regenerate weak meta tags")
    parser.add_argument("--offline", action="store_true", help="Use fallback suggestions instead of AI")
    parser.add_argument("--output", default=None, help="Report path (default: output/seo_report_<timestamp>.json)")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    input_dir = Path(args.input_dir)
    if not input_dir.is_dir():
        print(f"Error: {input_dir} is not a directory")
        sys.exit(1)

    store = load_documents(input_dir, on_error=lambda path, e: print(f"  ✗ Skipping {path.name}: {e}"))
    if not len(store):
        print(f"No posts found in {input_dir}")
        sys.exit(1)

    print(f"\n{'='*70}")
    print(f"  BATCH SEO SCORING")
    print(f"  Posts: {len(store)}")
    print(f"{'='*70}\n")

    generator = OfflineGenerator() if args.offline else None
    results = run_batch(store, optimize=args.optimize, generator=generator)

    avg_score = sum(r["score"] for r in results) / len(results)
    print(f"  Avg score: {avg_score:.1f}/100\n")
    for r in sorted(results, key=lambda x: x["score"], reverse=True):
        bar_len = int(r["score"] / 2.5)
        bar = "█" * bar_len + "░" * (40 - bar_len)
        after = f" → {r['optimized_score']}" if "optimized_score" in r else ""
        print(f"  {r['slug'][:30]:<30} {bar} {r['score']}{after}")

    if args.output:
        report_path = Path(args.output)
    else:
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        report_path = Path(OUTPUT["dir"]) / OUTPUT["report_name"].format(timestamp=timestamp)
    report_path.parent.mkdir(parents=True, exist_ok=True)
    report_path.write_text(json.dumps(results, indent=2))
    print(f"\n  Report: {report_path}")
    print(f"{'='*70}\n")


if __name__ == "__main__":
    main()
