from __future__ import annotations

import hashlib
import json
import logging
import threading
from collections import OrderedDict
from typing import Callable

from resume_ats.core.scoring import get_scoring_tables
from resume_ats.schemas.ats import ScanResult
from resume_ats.schemas.resume import ResumeRecord
from resume_ats.services.ats_service import scan

logger = logging.getLogger(__name__)

Scanner = Callable[[ResumeRecord, "str | None"], ScanResult]


def content_hash(resume: ResumeRecord, job_description: str | None) -> str:
    payload = {
        "resume": resume.model_dump(mode="json"),
        "job_description": job_description or "",
        "scoring_version": get_scoring_tables().version,
    }
    canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


class ScanGuard:
    """Skip re-scoring when a session's resume and job description are unchanged.

    Keeps the last (hash, result) per key; the oldest key is evicted once
    `max_keys` is reached.
    """

    def __init__(self, max_keys: int = 512, scanner: Scanner | None = None) -> None:
        if max_keys < 1:
            raise ValueError("max_keys must be at least 1")
        self._max_keys = max_keys
        self._scanner: Scanner = scanner or scan
        self._entries: OrderedDict[str, tuple[str, ScanResult]] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def lookup(self, key: str, resume: ResumeRecord, job_description: str | None = None) -> ScanResult | None:
        digest = content_hash(resume, job_description)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or entry[0] != digest:
                return None
            self._entries.move_to_end(key)
            return entry[1]

    def store(self, key: str, resume: ResumeRecord, job_description: str | None, result: ScanResult) -> None:
        digest = content_hash(resume, job_description)
        with self._lock:
            self._entries[key] = (digest, result)
            self._entries.move_to_end(key)
            while len(self._entries) > self._max_keys:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("scan_guard_evicted key=%s", evicted)

    def scan(self, key: str, resume: ResumeRecord, job_description: str | None = None) -> tuple[ScanResult, bool]:
        """Return (result, cached)."""
        cached = self.lookup(key, resume, job_description)
        if cached is not None:
            return cached, True
        result = self._scanner(resume, job_description)
        self.store(key, resume, job_description, result)
        return result, False

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
