"""Dataset loading: fill an :class:`InMemoryRepository` from a YAML or JSON file.

The file is a mapping with optional ``prospects``, ``signals``,
``contacts``, ``activities`` and ``enrichments`` lists whose entries use
the record field names (camelCase or snake_case).  JSON is read through
the YAML parser.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from sales_intel.data.memory import InMemoryRepository
from sales_intel.data.models import (
    Contact,
    ContactActivity,
    ContactEnrichment,
    Prospect,
    ProspectSignal,
)
from sales_intel.errors import RuleLoadError

logger = logging.getLogger(__name__)


def read_mapping(path: str | Path) -> dict[str, Any]:
    """Read a YAML/JSON file whose root must be a mapping."""
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        try:
            raw_data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise RuleLoadError(f"Invalid YAML in {path}: {exc}") from exc
    if raw_data is None:
        raise RuleLoadError(f"Empty file: {path}")
    if not isinstance(raw_data, dict):
        raise RuleLoadError(f"File root must be a mapping: {path}")
    return raw_data


def load_dataset(path: str | Path) -> InMemoryRepository:
    """Build a repository from the records in *path*."""
    data = read_mapping(path)
    repo = InMemoryRepository()
    try:
        for row in data.get("prospects", []):
            repo.add_prospect(Prospect.model_validate(row))
        for row in data.get("signals", []):
            repo.add_signal(ProspectSignal.model_validate(row))
        for row in data.get("contacts", []):
            repo.add_contact(Contact.model_validate(row))
        for row in data.get("activities", []):
            repo.add_activity(ContactActivity.model_validate(row))
        for row in data.get("enrichments", []):
            repo.add_enrichment(ContactEnrichment.model_validate(row))
    except (ValidationError, ValueError, TypeError) as exc:
        raise RuleLoadError(f"Invalid record in dataset {path}: {exc}") from exc

    logger.debug(
        "Loaded dataset %s: %d prospects, %d signals, %d contacts, %d activities",
        path,
        len(data.get("prospects", [])),
        len(data.get("signals", [])),
        len(data.get("contacts", [])),
        len(data.get("activities", [])),
    )
    return repo
