# src/storage/record_store.py — v2
"""Flat-file persistence of analysis records as <caseId>.json.

Each file holds the camelCase record plus a ``similarCases`` list, so a
stored case reads back exactly as it was returned.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from caselens.core.models import AnalysisRecord

logger = logging.getLogger(__name__)

SIMILAR_CASES_KEY = "similarCases"


class CaseNotFoundError(LookupError):
    """Raised when no stored record exists for a case ID."""


class StoredCase(BaseModel):
    """One persisted analysis with the similar cases found for it."""

    model_config = ConfigDict(frozen=True)

    analysis: AnalysisRecord
    similar_cases: list[str] = Field(default_factory=list)
    path: Path | None = None


class RecordStore:
    """Write and read analysis records under a single directory.

    Args:
        root: Directory holding one JSON file per case.
    """

    def __init__(self, root: Path | str) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, case_id: str) -> Path:
        safe = case_id.replace("/", "_").replace("\\", "_")
        return self._root / f"{safe}.json"

    async def save(
        self,
        record: AnalysisRecord,
        similar_cases: list[str] | None = None,
    ) -> Path:
        """Persist a record and its similar cases; returns the written path."""
        path = self.path_for(record.case_id)
        data = record.to_dict()
        data[SIMILAR_CASES_KEY] = list(similar_cases or [])
        payload = json.dumps(data, indent=2, ensure_ascii=False)
        await asyncio.to_thread(self._write, path, payload)
        logger.info("Analysis saved to %s", path)
        return path

    async def load(self, case_id: str) -> StoredCase:
        """Read a stored case back.

        Raises:
            CaseNotFoundError: If no record exists for case_id.
        """
        if not await self.exists(case_id):
            raise CaseNotFoundError(f"Case not found: {case_id}")
        path = self.path_for(case_id)
        raw = await asyncio.to_thread(path.read_text, encoding="utf-8")
        data = json.loads(raw)
        similar = data.pop(SIMILAR_CASES_KEY, None) or []
        return StoredCase(
            analysis=AnalysisRecord.model_validate(data),
            similar_cases=[str(name) for name in similar],
            path=path,
        )

    async def exists(self, case_id: str) -> bool:
        return self.path_for(case_id).is_file()

    async def list_case_ids(self) -> list[str]:
        """Case IDs of all stored records, sorted."""
        if not self._root.is_dir():
            return []
        return sorted(p.stem for p in self._root.glob("*.json"))

    @staticmethod
    def _write(path: Path, payload: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(payload, encoding="utf-8")
