"""
Boundary validation for extractor output.

The extractor is an external, non-deterministic model, so its output is
checked here before the validation engine sees it. Missing or blank fields
are allowed through (the rules report them); wrong types and missing
documents are rejected.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .config import logger
from .schemas import DocumentSet


class DocumentSchemaError(ValueError):
    """Raised when extractor output does not have the expected structure."""

    def __init__(self, issues: list[str]):
        self.issues = issues
        super().__init__("; ".join(issues))


def _format_issues(error: ValidationError) -> list[str]:
    issues = []
    for item in error.errors():
        path = ".".join(str(part) for part in item["loc"]) or "<root>"
        issues.append(f"{path}: {item['msg']}")
    return issues


def parse_documents(payload: Any) -> DocumentSet:
    """
    Build a DocumentSet from a raw mapping.

    Args:
        payload: Mapping with "invoice", "purchase_order" and "receipt" keys

    Returns:
        The typed document set

    Raises:
        DocumentSchemaError: if the payload does not match the schema
    """
    if not isinstance(payload, dict):
        raise DocumentSchemaError([f"<root>: expected an object, got {type(payload).__name__}"])

    try:
        return DocumentSet.model_validate(payload)
    except ValidationError as e:
        issues = _format_issues(e)
        logger.warning(f"Rejected extractor output with {len(issues)} schema issue(s)")
        raise DocumentSchemaError(issues) from e


def load_documents(path: Path) -> list[DocumentSet]:
    """
    Read document sets from a JSON file.

    The file may hold a single document-set object or a list of them.
    Issues from list entries are prefixed with the entry index.
    """
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if not isinstance(data, list):
        return [parse_documents(data)]

    document_sets = []
    issues = []
    for index, entry in enumerate(data):
        try:
            document_sets.append(parse_documents(entry))
        except DocumentSchemaError as e:
            issues.extend(f"[{index}] {issue}" for issue in e.issues)

    if issues:
        raise DocumentSchemaError(issues)

    return document_sets
