"""
JSON document store for recruitment entities.

The whole entity graph lives in memory and is serialized as a single JSON
document after every logical mutation. Integer ids come from per-collection
counters persisted alongside the collections.

Usage:
    store = JsonDocumentStore("data/db.json")
    requirement_id = store.next_id("job_requirements")
    store.data.job_requirements.append(requirement)
    store.write()
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from database.models.audit import StatusChangeLog
from database.models.candidates import Candidate
from database.models.communications import EmailLog
from database.models.jobs import JobPosting, JobRequirement

logger = logging.getLogger(__name__)

COLLECTIONS: tuple[str, ...] = (
    "job_requirements",
    "job_postings",
    "candidates",
    "status_change_logs",
    "email_logs",
)


class EntityGraph(BaseModel):
    """Every collection the store owns, plus the id counters."""

    job_requirements: list[JobRequirement] = Field(default_factory=list)
    job_postings: list[JobPosting] = Field(default_factory=list)
    candidates: list[Candidate] = Field(default_factory=list)
    status_change_logs: list[StatusChangeLog] = Field(default_factory=list)
    email_logs: list[EmailLog] = Field(default_factory=list)
    counters: dict[str, int] = Field(
        default_factory=lambda: {name: 0 for name in COLLECTIONS}
    )


class JsonDocumentStore:
    """
    File-backed entity store with whole-document replace semantics.

    ``write`` blocks the event loop for the length of the flush. Managers call
    it without awaiting anything in between, so a duplicate check and the
    insert that follows it cannot interleave with another request, and a
    mutation is on disk by the time its call returns.

    Pass ``path=None`` for a purely in-memory store; ``write`` is then a no-op.
    """

    def __init__(self, path: Optional[str | Path] = None):
        """
        Initialize the store and load any existing document.

        Args:
            path: Location of the JSON document, or None for in-memory only
        """
        self.path = Path(path) if path is not None else None
        self.data = EntityGraph()
        if self.path is not None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.read()

    def read(self) -> EntityGraph:
        """
        Load the document from disk, replacing the in-memory graph.

        A missing file leaves an empty graph. A corrupt file is logged and
        replaced by an empty graph on the next write.
        """
        if self.path is None or not self.path.exists():
            return self.data

        try:
            self.data = EntityGraph.model_validate_json(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError, PydanticValidationError) as e:
            logger.error(f"Error reading {self.path}, starting with an empty store: {e}")
            self.data = EntityGraph()

        return self.data

    def write(self) -> None:
        """Serialize the whole graph and atomically replace the document."""
        if self.path is None:
            return

        payload = self.data.model_dump_json(indent=2)
        fd, tmp_path = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def next_id(self, collection: str) -> int:
        """
        Reserve the next integer id for a collection.

        Args:
            collection: Collection name, e.g. "candidates"

        Returns:
            An id strictly greater than every id previously issued for it
        """
        counters = self.data.counters
        counters[collection] = counters.get(collection, 0) + 1
        return counters[collection]
