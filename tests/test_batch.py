import json

import pytest

import batch
from documents import InMemoryDocumentStore
from tests.conftest import FakeGenerator, post_markdown


class TestRunBatch:

    def test_scores_every_post(self, good_document, weak_document):
        store = InMemoryDocumentStore()
        store.add(good_document)
        store.add(weak_document)
        results = batch.run_batch(store)
        assert {r["slug"] for r in results} == {"instagram-reels-strategy", "reels-tips"}
        assert all(0 <= r["score"] <= 100 for r in results)
        assert all("optimized_score" not in r for r in results)

    def test_optimize_improves_weak_post(self, weak_document):
        store = InMemoryDocumentStore()
        store.add(weak_document)
        generator = FakeGenerator(text=json.dumps({
            "title": "Instagram Reels Tips That Actually Grow Small Accounts",
            "description": (
                "Discover practical Instagram Reels tips for small accounts, from hooks and captions "
                "to posting schedules, so every short video helps your profile grow."
            ),
            "keywords": ["instagram reels tips", "reels for small accounts", "reels hooks"],
        }))
        [result] = batch.run_batch(store, optimize=True, generator=generator)
        assert result["optimized_score"] > result["score"]


class TestCli:

    def test_writes_report(self, tmp_path, capsys, good_document, weak_document):
        posts = tmp_path / "posts"
        posts.mkdir()
        for doc in (good_document, weak_document):
            (posts / f"{doc.slug}.md").write_text(post_markdown(doc))
        (posts / "broken.md").write_text("no frontmatter")
        report = tmp_path / "report.json"

        batch.main(["--input-dir", str(posts), "--offline", "--output", str(report)])

        data = json.loads(report.read_text())
        assert len(data) == 2
        out = capsys.readouterr().out
        assert "Skipping broken.md" in out
        assert "Avg score" in out

    def test_missing_directory(self, tmp_path):
        with pytest.raises(SystemExit):
            batch.main(["--input-dir", str(tmp_path / "nope")])
