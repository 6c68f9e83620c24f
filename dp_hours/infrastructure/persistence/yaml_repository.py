"""YAML file repository for operation records.

The file holds a plain list of records::

    - id: 3f2a...
      date: '2024-01-01'
      time: '08:00'
      location: Rig1
      operation_type: DP Setup

The whole file is rewritten after each mutation.
"""
import logging
from pathlib import Path
from typing import Any

import yaml

from dp_hours.core.types import RecordId
from dp_hours.domain.operation.operation_record import OperationRecord
from dp_hours.exceptions import DPHoursError, PersistenceError
from dp_hours.infrastructure.persistence.in_memory_repository import (
    InMemoryRecordRepository,
)

logger = logging.getLogger(__name__)


class YamlRecordRepository(InMemoryRecordRepository):
    """Records loaded from, and saved to, a YAML file."""

    def __init__(self, path: Path) -> None:
        self._path = path
        super().__init__(self._load())
        logger.info("Loaded %d operation record(s) from %s", len(self._records), path)

    @property
    def path(self) -> Path:
        """Return the path of the record file."""
        return self._path

    def _load(self) -> list[OperationRecord]:
        if not self._path.exists():
            return []
        try:
            with open(self._path, encoding="utf-8") as file:
                content: Any = yaml.safe_load(file)
        except (OSError, yaml.YAMLError) as e:
            raise PersistenceError(
                f"Cannot read record file: {e}", path=self._path
            ) from e

        if content is None:
            return []
        if not isinstance(content, list):
            raise PersistenceError(
                "Record file must contain a list of records", path=self._path
            )
        try:
            return [OperationRecord.from_dict(item) for item in content]
        except (DPHoursError, KeyError, TypeError, AttributeError) as e:
            raise PersistenceError(
                f"Invalid record in {self._path}: {e}", path=self._path
            ) from e

    def _save(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        try:
            with open(self._path, "w", encoding="utf-8") as file:
                yaml.safe_dump(
                    [record.to_dict() for record in self.get_all_records()],
                    file,
                    allow_unicode=True,
                    sort_keys=False,
                )
        except OSError as e:
            raise PersistenceError(
                f"Cannot write record file: {e}", path=self._path
            ) from e

    def upsert_record(self, record: OperationRecord) -> RecordId:
        record_id = super().upsert_record(record)
        self._save()
        logger.info("Saved operation record %s to %s", record_id, self._path)
        return record_id

    def delete_record(self, record_id: RecordId) -> None:
        super().delete_record(record_id)
        self._save()
        logger.info("Deleted operation record %s from %s", record_id, self._path)
