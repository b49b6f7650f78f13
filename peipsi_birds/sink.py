"""JSON file sink for crawl results."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from pathlib import Path

from peipsi_birds.common.data_models import BirdRecord
from peipsi_birds.common.exceptions import SinkWriteFailure

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_NAME = "peipsi-birds"


def dump_records(records: Sequence[BirdRecord]) -> str:
    """Serialize records as a JSON array, keeping Cyrillic text readable."""
    return json.dumps(
        [record.to_document() for record in records],
        ensure_ascii=False,
        indent=4,
    )


class JsonFileSink:
    """Writes the result collection to ``<directory>/<name>.json``.

    Args:
        name: File name without the ``.json`` extension.
        directory: Directory to write into (default: current directory).
    """

    def __init__(
        self,
        name: str = DEFAULT_OUTPUT_NAME,
        directory: Path | None = None,
    ) -> None:
        self.path = (directory or Path(".")) / f"{name}.json"

    def write(self, records: Sequence[BirdRecord]) -> Path:
        """Persist the records.

        Returns:
            Path of the written file.

        Raises:
            SinkWriteFailure: If the file cannot be written. The records
                passed in are left untouched.
        """
        try:
            self.path.write_text(dump_records(records), encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to write {self.path}: {e}", exc_info=True)
            raise SinkWriteFailure(str(self.path), str(e)) from e

        logger.info(f"Data written to {self.path}")
        return self.path
