import json

import pytest

import optimizer
from documents import Document, DocumentNotFound, document_from_markdown, parse_frontmatter
from optimizer import analyze_blog_post, fill_missing_meta_tags, optimize_blog_post
from tests.conftest import FakeGenerator, post_markdown

SUGGESTION = json.dumps({
    "title": "Instagram Reels Tips That Actually Grow Small Accounts",
    "description": "New description.",
    "keywords": ["instagram reels tips", "reels growth"],
})


class TestAnalyzeBlogPost:

    def test_missing_post(self, store):
        with pytest.raises(DocumentNotFound):
            analyze_blog_post(store, 99)

    def test_analyzes_stored_post(self, store, good_document):
        doc = store.add(good_document)
        assert analyze_blog_post(store, doc.id).score >= 70


class TestOptimizeBlogPost:

    def test_missing_post_fails_before_generation(self, store):
        generator = FakeGenerator(text=SUGGESTION)
        with pytest.raises(DocumentNotFound):
            optimize_blog_post(store, 1, generator)
        assert generator.prompts == []

    def test_good_post_is_unchanged(self, store, good_document):
        doc = store.add(good_document)
        generator = FakeGenerator(text=SUGGESTION)
        assert optimize_blog_post(store, doc.id, generator) == doc
        assert generator.prompts == []

    def test_only_weak_fields_are_replaced(self, store, weak_document):
        doc = store.add(weak_document)
        assert analyze_blog_post(store, doc.id).score < 70

        generator = FakeGenerator(text=SUGGESTION)
        optimized = optimize_blog_post(store, doc.id, generator)

        assert optimized.seo_title == weak_document.seo_title
        assert optimized.seo_description == "New description."
        assert optimized.seo_keywords == ["instagram reels tips", "reels growth"]
        assert store.get(doc.id) == optimized
        assert len(generator.prompts) == 1

    def test_fallback_used_when_generation_fails(self, store, weak_document):
        doc = store.add(weak_document)
        optimized = optimize_blog_post(store, doc.id, FakeGenerator(error="boom"))
        assert optimized.seo_description == "Short post about reels."
        assert optimized.seo_keywords == ["reels", "tips", "short", "post", "about"]


class TestFillMissingMetaTags:

    def test_fills_only_empty_fields(self):
        doc = Document(title="Reels", slug="reels", content="Body", seo_title="Keep Me")
        filled = fill_missing_meta_tags(doc, FakeGenerator(text=SUGGESTION))
        assert filled.seo_title == "Keep Me"
        assert filled.seo_description == "New description."
        assert filled.seo_keywords == ["instagram reels tips", "reels growth"]

    def test_complete_document_skips_generation(self, good_document):
        generator = FakeGenerator(text=SUGGESTION)
        assert fill_missing_meta_tags(good_document, generator) is good_document
        assert generator.prompts == []


class TestCli:

    def _write(self, tmp_path, document):
        path = tmp_path / f"{document.slug}.md"
        path.write_text(post_markdown(document))
        return path

    def test_analyze_json(self, tmp_path, capsys, good_document):
        path = self._write(tmp_path, good_document)
        optimizer.main(["--offline", "analyze", "--input", str(path), "--json"])
        data = json.loads(capsys.readouterr().out)
        assert data["score"] >= 70

    def test_analyze_summary(self, tmp_path, capsys, weak_document):
        path = self._write(tmp_path, weak_document)
        optimizer.main(["analyze", "--input", str(path)])
        assert "RECOMMENDATIONS" in capsys.readouterr().out

    def test_optimize_write(self, tmp_path, capsys, weak_document):
        path = self._write(tmp_path, weak_document)
        optimizer.main(["--offline", "optimize", "--input", str(path), "--write"])
        rewritten = document_from_markdown(path.read_text())
        assert rewritten.seo_description == "Short post about reels."
        assert "Updated:" in capsys.readouterr().out

    def test_optimize_write_keeps_other_frontmatter(self, tmp_path, weak_document):
        path = tmp_path / "reels-tips.md"
        path.write_text(post_markdown(
            weak_document,
            category="marketing",
            tags=["instagram", "video"],
            canonical_url="https://example.com/blog/reels-tips",
        ))

        optimizer.main(["--offline", "optimize", "--input", str(path), "--write"])

        text = path.read_text()
        fm, body = parse_frontmatter(text)
        assert fm["category"] == "marketing"
        assert fm["tags"] == ["instagram", "video"]
        assert fm["canonical_url"] == "https://example.com/blog/reels-tips"
        assert fm["seo_title"] == weak_document.seo_title
        assert fm["seo_description"] == "Short post about reels."
        assert body == weak_document.content

    def test_optimize_good_post_leaves_file_alone(self, tmp_path, good_document):
        path = self._write(tmp_path, good_document)
        before = path.read_text()
        optimizer.main(["--offline", "optimize", "--input", str(path), "--write"])
        assert path.read_text() == before

    def test_fill_write(self, tmp_path, capsys):
        doc = Document(title="Reels Tips", slug="reels-tips", content="Short post about reels.",
                       seo_title="Keep This Title")
        path = tmp_path / "reels-tips.md"
        path.write_text(post_markdown(doc, category="marketing"))

        optimizer.main(["--offline", "fill", "--input", str(path), "--write"])

        filled = document_from_markdown(path.read_text())
        assert filled.seo_title == "Keep This Title"
        assert filled.seo_description == "Short post about reels."
        assert filled.seo_keywords == ["reels", "tips", "short", "post", "about"]
        assert parse_frontmatter(path.read_text())[0]["category"] == "marketing"
        assert "Updated:" in capsys.readouterr().out

    def test_fill_complete_post(self, tmp_path, capsys, good_document):
        path = self._write(tmp_path, good_document)
        optimizer.main(["--offline", "fill", "--input", str(path)])
        assert "already set" in capsys.readouterr().out

    def test_keywords_offline(self, capsys):
        optimizer.main(["--offline", "keywords", "--topic", "yoga", "--count", "2", "--json"])
        data = json.loads(capsys.readouterr().out)
        assert [k["keyword"] for k in data] == ["yoga", "best yoga"]

    def test_meta_tags_offline(self, tmp_path, capsys, weak_document):
        path = self._write(tmp_path, weak_document)
        optimizer.main(["--offline", "meta-tags", "--input", str(path)])
        data = json.loads(capsys.readouterr().out)
        assert data["title"] == "Reels Tips"

    def test_missing_input_exits(self, tmp_path):
        with pytest.raises(SystemExit):
            optimizer.main(["analyze", "--input", str(tmp_path / "missing.md")])
