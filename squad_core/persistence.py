# squad_core/persistence.py
from __future__ import annotations
import asyncio
import hashlib
import logging
import os
import re
from pathlib import Path
from typing import Dict, Optional, Protocol, runtime_checkable

from pydantic import ValidationError

from .models import SquadSnapshot
from .outcomes import PersistenceError

logger = logging.getLogger(__name__)


@runtime_checkable
class SquadStore(Protocol):
    """Durable home for one identity's squad, definitions and teams."""

    async def load(self, identity: str) -> Optional[SquadSnapshot]:
        """Return the stored snapshot, or None when nothing was saved yet."""
        ...

    async def save(self, identity: str, snapshot: SquadSnapshot) -> None:
        """Store the snapshot; raise PersistenceError on failure."""
        ...


class MemoryStore:
    """In-process store. Keeps serialized JSON so callers never share objects."""

    def __init__(self):
        self._docs: Dict[str, str] = {}
        self.saves = 0

    async def load(self, identity: str) -> Optional[SquadSnapshot]:
        raw = self._docs.get(identity)
        if raw is None:
            return None
        return SquadSnapshot.model_validate_json(raw)

    async def save(self, identity: str, snapshot: SquadSnapshot) -> None:
        self._docs[identity] = snapshot.to_json()
        self.saves += 1


_SAFE = re.compile(r"[^A-Za-z0-9_.-]+")


class JsonFileStore:
    """
    One JSON document per identity under `root`. Writes go to a temp file
    that replaces the previous document, so a crash mid-write leaves the
    last good save in place.
    """

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def path_for(self, identity: str) -> Path:
        """Readable prefix plus a digest of the exact identity, so distinct identities never share a file."""
        safe = _SAFE.sub("_", identity).strip("._")[:48] or "anonymous"
        digest = hashlib.sha256(identity.encode("utf-8")).hexdigest()[:16]
        return self.root / f"{safe}-{digest}.json"

    def _read(self, identity: str) -> Optional[SquadSnapshot]:
        path = self.path_for(identity)
        if not path.exists():
            return None
        try:
            return SquadSnapshot.model_validate_json(path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as e:
            raise PersistenceError(f"Could not read {path}: {e}") from e

    def _write(self, identity: str, snapshot: SquadSnapshot):
        path = self.path_for(identity)
        tmp = path.with_suffix(".json.tmp")
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            tmp.write_text(snapshot.to_json(), encoding="utf-8")
            os.replace(tmp, path)
        except OSError as e:
            raise PersistenceError(f"Could not write {path}: {e}") from e

    async def load(self, identity: str) -> Optional[SquadSnapshot]:
        snap = await asyncio.to_thread(self._read, identity)
        logger.debug("Loaded %s: %s", identity, "found" if snap is not None else "not found")
        return snap

    async def save(self, identity: str, snapshot: SquadSnapshot) -> None:
        await asyncio.to_thread(self._write, identity, snapshot)
        logger.debug("Saved %s (%d players, %d teams)", identity, len(snapshot.players), len(snapshot.teams))
