"""Serialize OpenAPI documents to JSON or YAML."""

import json
from pathlib import Path
from typing import Any

import yaml

FORMATS = ("json", "yaml")


def detect_output_format(file_path: Path) -> str:
    """Pick the output format from the file extension.

    Returns: 'yaml' for .yaml/.yml files, 'json' otherwise.
    """
    if file_path.suffix.lower() in (".yaml", ".yml"):
        return "yaml"
    return "json"


def dump_document(document: dict[str, Any], fmt: str = "json") -> str:
    """Render a document as JSON or YAML text, keeping key order."""
    if fmt == "json":
        return json.dumps(document, indent=2, ensure_ascii=False) + "\n"
    if fmt == "yaml":
        return yaml.safe_dump(document, sort_keys=False, allow_unicode=True)
    raise ValueError(f"Unknown output format {fmt!r}, expected one of {FORMATS}")


def write_document(document: dict[str, Any], file_path: Path, fmt: str = "auto") -> str:
    """Write a document to ``file_path``; returns the format used."""
    if fmt == "auto":
        fmt = detect_output_format(file_path)

    text = dump_document(document, fmt)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(text, encoding="utf-8")
    return fmt
