"""Tests for the JSON document store."""

import json

import pytest

from database.models.jobs import JobRequirement
from database.store import COLLECTIONS, EntityGraph, JsonDocumentStore


def _requirement(store: JsonDocumentStore, title: str = "Analyst") -> JobRequirement:
    return JobRequirement(
        id=store.next_id("job_requirements"),
        title=title,
        department="Finance",
        budget=50000,
    )


class TestInMemoryStore:
    """Store with no backing file."""

    def test_starts_empty(self):
        store = JsonDocumentStore()

        for name in COLLECTIONS:
            assert getattr(store.data, name) == []
            assert store.data.counters[name] == 0

    def test_next_id_is_strictly_increasing_per_collection(self):
        store = JsonDocumentStore()

        ids = [store.next_id("candidates") for _ in range(5)]

        assert ids == [1, 2, 3, 4, 5]
        assert store.next_id("job_postings") == 1

    def test_next_id_for_unknown_collection_starts_at_one(self):
        store = JsonDocumentStore()
        assert store.next_id("interviews") == 1

    def test_write_is_noop_without_path(self):
        store = JsonDocumentStore()
        store.data.job_requirements.append(_requirement(store))

        store.write()

        assert store.path is None


class TestFileStore:
    """Store backed by a JSON document on disk."""

    def test_missing_file_yields_empty_graph(self, tmp_path):
        store = JsonDocumentStore(tmp_path / "data" / "db.json")

        assert store.data == EntityGraph()
        assert (tmp_path / "data").is_dir()

    def test_write_then_reload_round_trips_graph_and_counters(self, tmp_path):
        path = tmp_path / "db.json"
        store = JsonDocumentStore(path)
        store.data.job_requirements.append(_requirement(store, "Analyst"))
        store.data.job_requirements.append(_requirement(store, "Controller"))
        store.write()

        reloaded = JsonDocumentStore(path)

        assert [r.title for r in reloaded.data.job_requirements] == ["Analyst", "Controller"]
        assert reloaded.data.counters["job_requirements"] == 2
        assert reloaded.next_id("job_requirements") == 3

    def test_document_is_indented_json_with_snake_case_keys(self, tmp_path):
        path = tmp_path / "db.json"
        store = JsonDocumentStore(path)
        store.data.job_requirements.append(_requirement(store))
        store.write()

        text = path.read_text()
        document = json.loads(text)

        assert text.startswith("{\n  ")
        assert document["job_requirements"][0]["rejection_reason"] is None
        assert set(COLLECTIONS) <= set(document)

    def test_write_leaves_no_temp_files(self, tmp_path):
        path = tmp_path / "db.json"
        store = JsonDocumentStore(path)
        store.data.job_requirements.append(_requirement(store))

        store.write()
        store.write()

        assert sorted(p.name for p in tmp_path.iterdir()) == ["db.json"]

    def test_corrupt_file_is_logged_and_replaced_by_empty_graph(self, tmp_path, caplog):
        path = tmp_path / "db.json"
        path.write_text("{not json")

        with caplog.at_level("ERROR", logger="database.store"):
            store = JsonDocumentStore(path)

        assert store.data == EntityGraph()
        assert "starting with an empty store" in caplog.text

    def test_read_replaces_in_memory_graph(self, tmp_path):
        path = tmp_path / "db.json"
        writer = JsonDocumentStore(path)
        reader = JsonDocumentStore(path)

        writer.data.job_requirements.append(_requirement(writer))
        writer.write()

        assert reader.data.job_requirements == []
        reader.read()
        assert len(reader.data.job_requirements) == 1

    def test_failed_write_removes_temp_file(self, tmp_path, monkeypatch):
        path = tmp_path / "db.json"
        store = JsonDocumentStore(path)

        def boom(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr("database.store.os.replace", boom)

        with pytest.raises(OSError):
            store.write()

        assert list(tmp_path.iterdir()) == []

    def test_mutation_is_on_disk_when_the_call_returns(self, tmp_path):
        from api.services.candidates import CandidateLifecycleManager
        from api.services.postings import JobPostingManager
        from api.services.requirements import JobRequirementManager

        path = tmp_path / "db.json"
        store = JsonDocumentStore(path)
        requirements = JobRequirementManager(store)
        postings = JobPostingManager(store, requirements)
        candidates = CandidateLifecycleManager(store, postings)

        requirement = requirements.approve(
            requirements.create(title="Analyst", department="Finance", budget=1).id, 2
        )
        posting = postings.create(
            requirement_id=requirement.id, title="Analyst", description="d", location="HQ"
        )
        candidates.apply(job_posting_id=posting.id, candidate_name="Ada", email="ada@example.com")

        on_disk = json.loads(path.read_text(encoding="utf-8"))
        assert [c["email"] for c in on_disk["candidates"]] == ["ada@example.com"]
        assert on_disk["job_postings"][0]["applicant_count"] == 1
