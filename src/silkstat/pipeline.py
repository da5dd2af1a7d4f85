from __future__ import annotations

import asyncio
import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import msgspec

from .catalog.registry import Catalog, default_catalog
from .facts import extract_facts
from .hunter import HunterEntry, hunter_entries
from .progress.engine import CategoryProgress, ProgressReport, build_progress, scene_matchers
from .progress.tiers import FourFlags
from .save.codec import SaveError, decode
from .save.document import parse_document

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DecodeResult:
    ok: bool = False
    finished: bool = True
    error: str | None = None
    progress: ProgressReport = field(default_factory=ProgressReport)
    hunter: tuple[HunterEntry, ...] = ()

    @classmethod
    def failed(cls, reason: str) -> DecodeResult:
        return cls(ok=False, finished=True, error=reason)

    def category(self, key: str) -> CategoryProgress | None:
        return self.progress.category(key)

    @property
    def nail(self) -> FourFlags:
        return self.progress.track("nail")

    @property
    def tool_pouch(self) -> FourFlags:
        return self.progress.track("toolPouch")

    @property
    def crafting_kit(self) -> FourFlags:
        return self.progress.track("craftingKit")


PENDING = DecodeResult(ok=False, finished=False)


def analyze_document(document: object, catalog: Catalog) -> DecodeResult:
    facts = extract_facts(document, scene_matchers(catalog))
    return DecodeResult(
        ok=True,
        progress=build_progress(facts, catalog),
        hunter=hunter_entries(catalog.hunter, facts.kills),
    )


def process_save(data: bytes, catalog: Catalog | None = None) -> DecodeResult:
    """Decode one save file and derive its progress; never raises for bad input."""

    catalog = catalog or default_catalog()
    try:
        document = parse_document(decode(data))
    except SaveError as exc:
        logger.warning("save processing failed: %s", exc)
        return DecodeResult.failed(str(exc))
    return analyze_document(document, catalog)


def result_to_builtins(result: DecodeResult) -> dict[str, Any]:
    return msgspec.to_builtins(result)


class SaveSession:
    """Holds the latest decode result; only the newest decode may publish."""

    def __init__(self, catalog: Catalog | None = None) -> None:
        self.catalog = catalog or default_catalog()
        self._lock = threading.Lock()
        self._generation = 0
        self._result = PENDING

    @property
    def result(self) -> DecodeResult:
        return self._result

    @property
    def generation(self) -> int:
        return self._generation

    def begin(self) -> int:
        with self._lock:
            self._generation += 1
            self._result = PENDING
            return self._generation

    def commit(self, token: int, result: DecodeResult) -> bool:
        with self._lock:
            if token != self._generation:
                logger.debug("dropping stale decode result %d (current %d)", token, self._generation)
                return False
            self._result = result
            return True

    def load_bytes(self, data: bytes) -> DecodeResult:
        token = self.begin()
        result = process_save(data, self.catalog)
        self.commit(token, result)
        return result

    def load_path(self, path: str | Path) -> DecodeResult:
        token = self.begin()
        result = self._read_and_process(Path(path))
        self.commit(token, result)
        return result

    async def async_load_path(self, path: str | Path) -> DecodeResult:
        token = self.begin()
        try:
            data = await asyncio.to_thread(Path(path).read_bytes)
        except OSError as exc:
            logger.warning("cannot read %s: %s", path, exc)
            result = DecodeResult.failed(str(exc))
        else:
            result = process_save(data, self.catalog)
        self.commit(token, result)
        return result

    def _read_and_process(self, path: Path) -> DecodeResult:
        try:
            data = path.read_bytes()
        except OSError as exc:
            logger.warning("cannot read %s: %s", path, exc)
            return DecodeResult.failed(str(exc))
        return process_save(data, self.catalog)
