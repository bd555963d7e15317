"""JSON collection persistence with atomic writes and corruption recovery."""

import json
import os
import shutil
import time
from pathlib import Path

import structlog

logger = structlog.get_logger()


class StorageError(Exception):
    """Invalid collection name or data directory."""


class JsonStore:
    """Named JSON list collections stored as files under one data directory.

    Reads never fail: missing, empty or corrupt files yield an empty list and
    the file is recreated as ``[]``. Writes go through backup, temp file,
    verification and an atomic replace.
    """

    def __init__(self, data_dir: str | Path):
        self.data_dir = Path(data_dir).expanduser()
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, name: str) -> Path:
        if not name or not isinstance(name, str):
            raise StorageError(f"Invalid collection name: {name!r}")
        if not name.endswith(".json"):
            name = f"{name}.json"
        path = (self.data_dir / name).resolve()
        if self.data_dir.resolve() not in path.parents:
            raise StorageError(f"Collection outside data dir: {name}")
        return path

    def load_collection(self, name: str) -> list:
        path = self.path_for(name)
        path.parent.mkdir(parents=True, exist_ok=True)

        if not path.exists():
            logger.info("collection_created", collection=name)
            self._write_empty(path)
            return []

        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            logger.error("collection_read_failed", collection=name, error=str(e))
            return []

        if not raw.strip():
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error("collection_corrupt", collection=name, error=str(e))
            self._quarantine(path)
            return []

        if not isinstance(data, list):
            logger.warning("collection_not_list", collection=name, type=type(data).__name__)
            return []
        return data

    def save_collection(self, name: str, records: list | None) -> bool:
        path = self.path_for(name)
        path.parent.mkdir(parents=True, exist_ok=True)

        if records is None:
            logger.warning("collection_save_none", collection=name)
            records = []

        try:
            payload = json.dumps(records, indent=2, ensure_ascii=False, default=str)
        except (TypeError, ValueError) as e:
            logger.error("collection_serialize_failed", collection=name, error=str(e))
            return False

        if path.exists():
            try:
                shutil.copy2(path, path.with_name(path.name + ".backup"))
            except OSError as e:
                logger.warning("collection_backup_failed", collection=name, error=str(e))

        tmp = path.with_name(path.name + ".tmp")
        try:
            tmp.write_text(payload, encoding="utf-8")
            json.loads(tmp.read_text(encoding="utf-8"))
            os.replace(tmp, path)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("collection_save_failed", collection=name, error=str(e))
            tmp.unlink(missing_ok=True)
            return False

        logger.debug("collection_saved", collection=name, records=len(records))
        return True

    def _quarantine(self, path: Path) -> None:
        backup = path.with_name(f"{path.name}.corrupted.{int(time.time() * 1000)}")
        try:
            shutil.copy2(path, backup)
            logger.info("collection_quarantined", backup=str(backup))
        except OSError as e:
            logger.error("collection_quarantine_failed", error=str(e))
        self._write_empty(path)

    @staticmethod
    def _write_empty(path: Path) -> None:
        try:
            path.write_text("[]", encoding="utf-8")
        except OSError as e:
            logger.error("collection_init_failed", path=str(path), error=str(e))
