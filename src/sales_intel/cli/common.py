"""Helpers shared by the CLI command handlers."""

from __future__ import annotations

import sys
from argparse import Namespace
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, NoReturn, TypeVar

from pydantic import BaseModel, ValidationError

from sales_intel.config import DEFAULT_CONFIG, EngineConfig, load_engine_config
from sales_intel.data.loader import read_mapping
from sales_intel.errors import SalesIntelError, log_and_return_error
from sales_intel.report import format_json

M = TypeVar("M", bound=BaseModel)


def fail(message: str) -> NoReturn:
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def parse_datetime(value: str) -> datetime:
    """argparse type for ISO-8601 timestamps; a trailing ``Z`` means UTC."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def engine_config(args: Namespace) -> EngineConfig:
    if not args.config:
        return DEFAULT_CONFIG
    try:
        return load_engine_config(args.config)
    except (SalesIntelError, OSError) as exc:
        fail(log_and_return_error(
            operation="load_engine_config",
            exc=exc,
            user_message=f"could not load engine config {args.config}: {exc}",
        ))


def read_input(path: str | Path) -> dict[str, Any]:
    path = Path(path)
    if not path.is_file():
        fail(f"input file does not exist: {path}")
    try:
        return read_mapping(path)
    except (SalesIntelError, OSError) as exc:
        fail(log_and_return_error(
            operation="read_input", exc=exc, user_message=f"could not read {path}: {exc}",
        ))


def validate_input(model: type[M], data: Any, source: str | Path) -> M:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        fail(f"invalid {model.__name__} in {source}:\n{exc}")


def emit(args: Namespace, result: Any, format_table: Callable[[Any], str]) -> None:
    if args.json:
        print(format_json(result))
    else:
        print(format_table(result))
