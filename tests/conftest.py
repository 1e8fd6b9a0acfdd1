import pytest
import yaml

from documents import Document, InMemoryDocumentStore
from suggestions import GenerationResult


class FakeGenerator:
    """Returns fixed text (or a fixed error) and records every prompt."""

    def __init__(self, text="", error=None):
        self.text = text
        self.error = error
        self.prompts = []

    def generate(self, prompt):
        self.prompts.append(prompt)
        return GenerationResult(text=self.text, error=self.error)


GOOD_TITLE = "Instagram Reels Strategy: A Practical Guide for Brands"
GOOD_DESCRIPTION = (
    "Learn how to plan, film and schedule Instagram Reels that grow your audience, "
    "with a repeatable weekly workflow and simple metrics to track progress."
)


def post_markdown(document, **extra):
    """Render a post as a markdown file with YAML frontmatter; ``extra`` adds keys."""
    fm = {
        "title": document.title,
        "slug": document.slug,
        "seo_title": document.seo_title,
        "seo_description": document.seo_description,
        "seo_keywords": list(document.seo_keywords),
    }
    optional = {
        "summary": document.summary,
        "author": document.author_name,
        "featured_image": document.featured_image,
        "date": document.published_at,
        "updated": document.updated_at,
    }
    fm.update({k: v for k, v in optional.items() if v})
    fm.update(extra)
    return f"---\n{yaml.safe_dump(fm, sort_keys=False)}---\n{document.content}"


SIMPLE_PARAGRAPH = "The cat sat on the mat. " * 14


def build_content(sections=4, links=2):
    lines = []
    for i in range(sections):
        lines.append(f"## Section {i + 1}")
        lines.append("")
        lines.append(SIMPLE_PARAGRAPH.strip())
        lines.append("")
    anchors = " and ".join(f'<a href="/blog/post-{i}">post {i}</a>' for i in range(links))
    if anchors:
        lines.append(f"<p>Read {anchors}.</p>")
    return "\n".join(lines)


@pytest.fixture
def good_document():
    return Document(
        title="Instagram Reels Strategy",
        slug="instagram-reels-strategy",
        content=build_content(),
        seo_title=GOOD_TITLE,
        seo_description=GOOD_DESCRIPTION,
        seo_keywords=["instagram reels", "reels strategy", "content calendar"],
        summary="How to plan Reels.",
        author_name="AI Content Team",
        published_at="2024-05-01",
    )


@pytest.fixture
def weak_document():
    return Document(
        title="Reels Tips",
        slug="reels-tips",
        content="Short post about reels.",
        seo_title=GOOD_TITLE,
        seo_description="bad description",
        seo_keywords=[],
    )


@pytest.fixture
def store():
    return InMemoryDocumentStore()
