"""JSON file implementation of the document store."""

import json
import logging
import os
import tempfile
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from vidstore.config import settings
from vidstore.errors import StoreUnavailable
from vidstore.models import Document
from vidstore.storage.store import DocumentStore

logger = logging.getLogger(__name__)


class JSONDocumentStore(DocumentStore):
    """Single-file JSON document store.

    Saves write the full document to a temporary file next to the target,
    fsync it and ``os.replace`` it into place, so a concurrent ``load`` sees
    either the old document or the new one, never a mix. A re-entrant lock
    serialises every load–mutate–save cycle inside the process.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        """Initialize the store.

        Args:
            path: Location of the JSON document. Defaults to settings.db_path.
        """
        self._path = Path(path) if path is not None else settings.db_path
        self._lock = threading.RLock()

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    @contextmanager
    def lock(self) -> Iterator[None]:
        with self._lock:
            yield

    def load(self) -> Document:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise StoreUnavailable(f"Cannot read document {self._path}: {e}") from e
        try:
            return Document.model_validate(json.loads(raw))
        except (json.JSONDecodeError, PydanticValidationError) as e:
            raise StoreUnavailable(f"Malformed document {self._path}: {e}") from e

    def save(self, document: Document) -> None:
        payload = json.dumps(document.to_json_dict(), indent=2, ensure_ascii=False)
        tmp_name = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self._path)
            tmp_name = None
        except OSError as e:
            raise StoreUnavailable(f"Cannot write document {self._path}: {e}") from e
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    logger.warning("Could not remove temp file %s", tmp_name)
        logger.debug(
            "Saved document: %d media, %d comments",
            len(document.media), len(document.comments),
        )
