"""
Blog post records, an in-memory post store, and markdown/frontmatter loading.
"""

import itertools
import re
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from pathlib import Path
from typing import Callable, Iterator, Optional

import yaml

FRONTMATTER_RE = re.compile(r'^---\s*\n(.*?)\n---\s*\n(.*)$', re.DOTALL)


class DocumentNotFound(LookupError):
    """Raised when a blog post id does not resolve to a stored post."""


@dataclass
class Document:
    title: str
    slug: str
    content: str
    seo_title: str = ""
    seo_description: str = ""
    seo_keywords: list[str] = field(default_factory=list)
    summary: str = ""
    author_name: str = ""
    featured_image: Optional[str] = None
    published_at: Optional[str] = None
    updated_at: Optional[str] = None
    id: Optional[int] = None


class InMemoryDocumentStore:
    """Dict-backed post store.

    Ids come from ``id_generator`` (any iterator of ints) so callers and tests
    control numbering instead of relying on a process-wide counter.
    """

    def __init__(self, id_generator: Optional[Iterator[int]] = None):
        self._documents: dict[int, Document] = {}
        self._ids = id_generator if id_generator is not None else itertools.count(1)

    def add(self, document: Document) -> Document:
        stored = replace(document, id=next(self._ids))
        self._documents[stored.id] = stored
        return stored

    def get(self, post_id: int) -> Optional[Document]:
        return self._documents.get(post_id)

    def all(self) -> list[Document]:
        return sorted(self._documents.values(), key=lambda d: d.published_at or "", reverse=True)

    def update(self, post_id: int, **fields) -> Optional[Document]:
        current = self._documents.get(post_id)
        if current is None:
            return None
        updated = replace(current, **fields)
        self._documents[post_id] = updated
        return updated

    def __len__(self) -> int:
        return len(self._documents)


def require_document(store: InMemoryDocumentStore, post_id: int) -> Document:
    document = store.get(post_id)
    if document is None:
        raise DocumentNotFound(f"Blog post not found: {post_id}")
    return document


def parse_frontmatter(content: str) -> tuple[dict, str]:
    fm_match = FRONTMATTER_RE.match(content)
    if not fm_match:
        raise ValueError("No YAML frontmatter found")
    try:
        frontmatter = yaml.safe_load(fm_match.group(1)) or {}
    except yaml.YAMLError:
        frontmatter = {}
    if not isinstance(frontmatter, dict):
        frontmatter = {}
    return frontmatter, fm_match.group(2)


def _as_text(value) -> Optional[str]:
    if value is None or value == "":
        return None
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def _as_keywords(value) -> list[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [k.strip() for k in value.split(",") if k.strip()]
    return [str(k) for k in value]


def document_from_markdown(text: str, default_slug: str = "") -> Document:
    fm, body = parse_frontmatter(text)
    return Document(
        title=str(fm.get("title") or ""),
        slug=str(fm.get("slug") or default_slug),
        content=body,
        seo_title=str(fm.get("seo_title") or ""),
        seo_description=str(fm.get("seo_description") or fm.get("description") or ""),
        seo_keywords=_as_keywords(fm.get("seo_keywords", fm.get("keywords"))),
        summary=str(fm.get("summary") or ""),
        author_name=str(fm.get("author") or ""),
        featured_image=_as_text(fm.get("featured_image")),
        published_at=_as_text(fm.get("date")),
        updated_at=_as_text(fm.get("updated")),
    )


def update_frontmatter(text: str, updates: dict) -> str:
    """Set ``updates`` in a post's frontmatter, keeping every other key and the body as written.

    Malformed YAML raises ValueError instead of reading as empty frontmatter.
    """
    fm_match = FRONTMATTER_RE.match(text)
    if not fm_match:
        raise ValueError("No YAML frontmatter found")
    try:
        frontmatter = yaml.safe_load(fm_match.group(1)) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Cannot update malformed frontmatter: {e}") from e
    if not isinstance(frontmatter, dict):
        raise ValueError("Frontmatter is not a mapping")
    frontmatter.update(updates)
    header = yaml.safe_dump(frontmatter, sort_keys=False, allow_unicode=True)
    return f"---\n{header}---\n{fm_match.group(2)}"


def load_document(path: Path) -> Document:
    path = Path(path)
    return document_from_markdown(path.read_text(encoding="utf-8"), default_slug=path.stem)


def load_documents(directory: Path, store: Optional[InMemoryDocumentStore] = None,
                   on_error: Optional[Callable[[Path, Exception], None]] = None) -> InMemoryDocumentStore:
    """Load every ``*.md`` file in ``directory`` into a store, sorted by filename."""
    store = store if store is not None else InMemoryDocumentStore()
    for path in sorted(Path(directory).glob("*.md")):
        try:
            store.add(load_document(path))
        except ValueError as e:
            if on_error is None:
                raise
            on_error(path, e)
    return store
