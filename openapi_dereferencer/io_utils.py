from __future__ import annotations

import json
import os
from typing import Any

import yaml

YAML_EXTENSIONS = ('.yaml', '.yml')


def parse_document(content: str, fmt: str | None = None) -> Any:
    """Parse JSON or YAML text. Without `fmt`, JSON is tried first, then YAML."""
    if fmt == 'json':
        return json.loads(content)
    if fmt == 'yaml':
        return yaml.safe_load(content)
    try:
        return json.loads(content)
    except json.JSONDecodeError:
        return yaml.safe_load(content)


def _format_from_name(name) -> str | None:
    if not isinstance(name, str):
        return None
    lowered = name.lower()
    if lowered.endswith('.json'):
        return 'json'
    if lowered.endswith(YAML_EXTENSIONS):
        return 'yaml'
    return None


def read_document(file_obj):
    """Read an OpenAPI document from an uploaded file or file path."""
    if file_obj is None:
        raise ValueError("No file uploaded.")

    if hasattr(file_obj, 'read'):
        if hasattr(file_obj, 'seek'):
            file_obj.seek(0)
        content = file_obj.read()
        if isinstance(content, bytes):
            content = content.decode('utf-8')
        return parse_document(content, _format_from_name(getattr(file_obj, 'name', None)))

    path = file_obj.name if hasattr(file_obj, 'name') else file_obj
    with open(path, 'r', encoding='utf-8') as f:
        return parse_document(f.read(), _format_from_name(os.fspath(path)))


def dump_document(document: Any, fmt: str = 'json') -> str:
    if fmt == 'yaml':
        return yaml.safe_dump(document, sort_keys=False, allow_unicode=True)
    return json.dumps(document, indent=2, ensure_ascii=False)
