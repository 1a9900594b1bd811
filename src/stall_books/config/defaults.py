"""Loader for the bundled starting document."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

DEFAULTS_PATH = Path(__file__).resolve().parent / "defaults.yaml"

_LIST_SECTIONS = ("menu", "toppings", "drinks", "inventory")


@lru_cache
def load_default_document() -> dict[str, Any]:
    """Load catalogue and display settings for a fresh document.

    Returns:
        Raw mapping with ``menu``, ``toppings``, ``drinks``, ``inventory`` and
        ``settings`` keys, ready for model validation.
    """
    if not DEFAULTS_PATH.exists():
        return {section: [] for section in _LIST_SECTIONS} | {"settings": {}}

    data = yaml.safe_load(DEFAULTS_PATH.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{DEFAULTS_PATH.name}: top level must be a mapping")

    document: dict[str, Any] = {}
    for section in _LIST_SECTIONS:
        items = data.get(section) or []
        if not isinstance(items, list):
            raise ValueError(f"{DEFAULTS_PATH.name}: {section} must be a list")
        for idx, item in enumerate(items):
            if not isinstance(item, dict):
                raise ValueError(
                    f"{DEFAULTS_PATH.name}: {section}[{idx}] must be a mapping"
                )
        document[section] = items

    settings = data.get("settings") or {}
    if not isinstance(settings, dict):
        raise ValueError(f"{DEFAULTS_PATH.name}: settings must be a mapping")
    document["settings"] = settings
    return document
