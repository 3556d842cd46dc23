"""JSON file repository for the application state."""

import logging
import os
import tempfile
from dataclasses import dataclass
from datetime import tzinfo
from pathlib import Path

from pydantic import ValidationError

from diet_tracker.adapters.state_document import (
    StateDocument,
    document_to_state,
    state_to_document,
)
from diet_tracker.domain.errors import PersistenceError
from diet_tracker.domain.state import AppState
from diet_tracker.services.state_store import StateRepository

logger = logging.getLogger(__name__)


@dataclass
class JsonStateRepository(StateRepository):
    """Stores the whole state as one JSON document, replaced atomically."""

    path: Path
    tz: tzinfo | None = None

    def load(self) -> AppState | None:
        """Return the stored state, or None if missing or unreadable."""
        if not self.path.exists():
            logger.info("No state file at %s", self.path)
            return None
        try:
            raw = self.path.read_text(encoding="utf-8")
            document = StateDocument.model_validate_json(raw)
        except (OSError, UnicodeDecodeError, ValidationError):
            logger.warning(
                "Ignoring unreadable state file %s", self.path, exc_info=True
            )
            return None
        return document_to_state(document, self.tz)

    def save(self, state: AppState) -> None:
        """Write the state to a sibling temp file, then swap it into place."""
        payload = state_to_document(state).model_dump_json(by_alias=True, indent=2)
        tmp_name: str | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                tmp_name = handle.name
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self.path)
        except OSError as exc:
            logger.exception("Failed to write state file %s", self.path)
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            raise PersistenceError(f"Could not save state to {self.path}") from exc
