#!/usr/bin/env python3
"""
Builds sitemap.xml, robots.txt and per-post JSON-LD structured data
for a directory of markdown blog posts.

Usage:
    python publish.py --input-dir posts --base-url https://example.com
    python publish.py --input-dir posts --base-url https://example.com --output-dir public
"""

import argparse
import json
import sys
from datetime import date, datetime
from pathlib import Path
from typing import Iterable, Optional
from xml.sax.saxutils import escape

from config import PUBLISHER, ROBOTS, SITEMAP
from documents import Document, load_documents


def _url_entry(loc: str, changefreq: str, priority: str, lastmod: Optional[str] = None) -> list[str]:
    lines = ['  <url>', f'    <loc>{escape(loc)}</loc>']
    if lastmod:
        lines.append(f'    <lastmod>{escape(lastmod)}</lastmod>')
    lines.append(f'    <changefreq>{changefreq}</changefreq>')
    lines.append(f'    <priority>{priority}</priority>')
    lines.append('  </url>')
    return lines


def generate_sitemap(documents: Iterable[Document], base_url: str, today: Optional[date] = None) -> str:
    base_url = base_url.rstrip('/')
    fallback_lastmod = (today or date.today()).isoformat()
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">',
    ]
    for page in SITEMAP["static_pages"]:
        lines.extend(_url_entry(f'{base_url}{page["path"]}', page["changefreq"], page["priority"]))
    for doc in documents:
        lastmod = doc.updated_at or doc.published_at or fallback_lastmod
        lines.extend(_url_entry(f'{base_url}/blog/{doc.slug}', SITEMAP["post_changefreq"],
                                SITEMAP["post_priority"], lastmod))
    lines.append('</urlset>')
    return '\n'.join(lines)


def generate_robots_txt(base_url: str) -> str:
    base_url = base_url.rstrip('/')
    disallow = '\n'.join(f'Disallow: {p}' for p in ROBOTS["disallow"])
    allow = '\n'.join(f'Allow: {p}' for p in ROBOTS["allow"])
    return f"""User-agent: *
Allow: /
Sitemap: {base_url}/sitemap.xml

# Disallow admin and private areas
{disallow}

# Allow search crawlers to access key content
{allow}
"""


def generate_structured_data(doc: Document, base_url: str, author_name: Optional[str] = None) -> dict:
    """Build a schema.org BlogPosting object for one post."""
    base_url = base_url.rstrip('/')
    post_url = f'{base_url}/blog/{doc.slug}'
    date_published = doc.published_at or datetime.now().isoformat()
    return {
        "@context": "https://schema.org",
        "@type": "BlogPosting",
        "mainEntityOfPage": {"@type": "WebPage", "@id": post_url},
        "headline": doc.title,
        "description": doc.summary,
        "image": [doc.featured_image] if doc.featured_image else [],
        "author": {"@type": "Person", "name": author_name or doc.author_name},
        "publisher": {
            "@type": "Organization",
            "name": PUBLISHER["name"],
            "logo": {"@type": "ImageObject", "url": f'{base_url}{PUBLISHER["logo_path"]}'},
        },
        "datePublished": date_published,
        "dateModified": doc.updated_at or date_published,
        "keywords": ", ".join(doc.seo_keywords),
    }


def main(argv=None):
    parser = argparse.ArgumentParser(description="Generate sitemap, robots.txt and structured data")
    parser.add_argument("--input-dir", required=True, help="Directory of markdown posts")
    parser.add_argument("--base-url", required=True, help="Site root, e.g. https://example.com")
    parser.add_argument("--output-dir", default=None, help="Write files here instead of printing")
    args = parser.parse_args(argv)

    input_dir = Path(args.input_dir)
    if not input_dir.is_dir():
        print(f"Error: {input_dir} is not a directory")
        sys.exit(1)

    store = load_documents(input_dir, on_error=lambda path, e: print(f"Skipping {path.name}: {e}"))
    documents = store.all()
    sitemap = generate_sitemap(documents, args.base_url)
    robots = generate_robots_txt(args.base_url)

    if not args.output_dir:
        print(sitemap)
        print()
        print(robots)
        return

    out = Path(args.output_dir)
    (out / "structured-data").mkdir(parents=True, exist_ok=True)
    (out / "sitemap.xml").write_text(sitemap)
    (out / "robots.txt").write_text(robots)
    for doc in documents:
        (out / "structured-data" / f"{doc.slug}.json").write_text(
            json.dumps(generate_structured_data(doc, args.base_url), indent=2))
    print(f"Created: {out / 'sitemap.xml'}")
    print(f"Created: {out / 'robots.txt'}")
    print(f"Created: {len(documents)} structured data file(s) in {out / 'structured-data'}")


if __name__ == "__main__":
    main()
