"""JSON persistence, import and export of the whole document."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

import pydantic
import structlog

from stall_books.config import load_default_document
from stall_books.errors import ImportValidationFailed
from stall_books.models import AppData

logger = structlog.get_logger(__name__)

# Top-level keys an import must carry before it may replace the current data
REQUIRED_IMPORT_KEYS = ("menu", "inventory", "transactions", "settings")


def default_document() -> AppData:
    """A fresh document seeded with the bundled catalogue."""
    return AppData.model_validate(load_default_document())


def dump_document(state: AppData) -> str:
    return state.model_dump_json(by_alias=True, indent=2)


def load_document(text: str) -> AppData:
    """Parse a stored document without the import shape check."""
    return AppData.model_validate_json(text)


def import_document(text: str) -> AppData:
    """Validate an exported document before it replaces any state.

    Raises:
        ImportValidationFailed: Not JSON, missing a required section, or
            not a valid document.
    """
    try:
        raw = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise ImportValidationFailed("Import is not valid JSON") from exc

    if not isinstance(raw, dict):
        raise ImportValidationFailed("Import must be a JSON object")
    missing = [key for key in REQUIRED_IMPORT_KEYS if raw.get(key) is None]
    if missing:
        raise ImportValidationFailed(
            f"Import is missing required sections: {', '.join(missing)}",
            details=missing,
        )

    try:
        document = AppData.model_validate(raw)
    except pydantic.ValidationError as exc:
        raise ImportValidationFailed(
            "Import does not match the document structure",
            details=exc.errors(include_url=False),
        ) from exc

    logger.info(
        "document_imported",
        transactions=len(document.transactions),
        daily_logs=len(document.daily_logs),
    )
    return document


def save(path: Path, state: AppData) -> None:
    """Write the document atomically: temp file in the same directory, then replace."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(dump_document(state))
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    logger.debug("document_saved", path=str(path))


def load(path: Path) -> AppData:
    """Read the stored document, or start from defaults when none exists."""
    if not path.exists():
        logger.info("document_missing_using_defaults", path=str(path))
        return default_document()
    return load_document(path.read_text(encoding="utf-8"))
