from __future__ import annotations

import logging
import os
import tempfile
from typing import Any, List

import gradio as gr

from .config import DereferenceSettings
from .io_utils import dump_document, read_document
from .paths import escape_path_segment
from .refs import REF_KEY
from .results import run_operation
from .schema_utils import NodeKind, find_keyword_paths, node_kind

logger = logging.getLogger(__name__)

SUMMARY_KEYWORDS = (REF_KEY, 'allOf', 'oneOf', 'anyOf')


def _child_path(parent: str, key: str) -> str:
    if all(ch.isalnum() or ch in '_-' for ch in key):
        return f"{parent}.{key}"
    return f"{parent}['{escape_path_segment(key)}']"


def suggest_start_paths(document: Any) -> List[str]:
    """Offer `$`, each top-level section and each `components` section as scopes."""
    paths = ['$']
    if node_kind(document) is not NodeKind.MAPPING:
        return paths
    for key, value in document.items():
        top = _child_path('$', str(key))
        paths.append(top)
        if key == 'components' and node_kind(value) is NodeKind.MAPPING:
            paths.extend(_child_path(top, str(sub)) for sub in value)
    return paths


def summarize_document(document: Any) -> str:
    if document is None:
        return ""
    counts = [f"{kw}: {len(find_keyword_paths(document, kw))}" for kw in SUMMARY_KEYWORDS]
    return " | ".join(counts)


def parse_ignore_paths(text) -> List[str]:
    if not text:
        return []
    if isinstance(text, (list, tuple)):
        return [p.strip() for p in text if p and p.strip()]
    return [line.strip() for line in str(text).splitlines() if line.strip()]


def load_document_handler(file_obj):
    if file_obj is None:
        return None, gr.update(choices=["$"], value="$"), "No file uploaded.", ""

    try:
        settings = DereferenceSettings.from_env()
    except ValueError as e:
        return None, gr.update(choices=["$"], value="$"), f"Invalid configuration: {str(e)}", ""

    try:
        document = read_document(file_obj)
    except Exception as e:
        return None, gr.update(choices=["$"], value="$"), f"Error parsing document: {str(e)}", ""

    choices = suggest_start_paths(document)
    default = settings.default_start_at if settings.default_start_at in choices else "$"
    summary = summarize_document(document)
    return document, gr.update(choices=choices, value=default), "Successfully loaded.", summary


def process_document(document, start_at, ignore_paths, flatten, one_of, any_of, settings=None):
    """Run the selected passes in order. Returns (document, error message)."""
    steps = [('dereference', {'start_at': start_at or '$', 'ignore_paths': ignore_paths})]
    if flatten:
        steps.append(('flatten_all_of', {}))
    if one_of:
        steps.append(('select_first_of_one_of', {}))
    if any_of:
        steps.append(('select_first_of_any_of', {}))

    output = document
    for name, kwargs in steps:
        result = run_operation(name, output, settings=settings, **kwargs)
        if not result.ok:
            return None, f"{name} failed ({result.kind.value}): {result.message}"
        output = result.document
    return output, None


def process_document_handler(document, start_at, ignore_text, flatten, one_of, any_of, output_format, file_name):
    if document is None:
        return None, "No document loaded.", None

    try:
        settings = DereferenceSettings.from_env()
    except ValueError as e:
        return None, f"Invalid configuration: {str(e)}", None

    output, error = process_document(
        document,
        (start_at or "").strip() or "$",
        parse_ignore_paths(ignore_text),
        flatten,
        one_of,
        any_of,
        settings,
    )
    if error:
        return None, error, None

    fmt = "yaml" if (output_format or "").upper() == "YAML" else "json"
    if not file_name or not file_name.strip():
        file_name = "dereferenced"
    file_name = file_name.strip()
    ext = ".yaml" if fmt == "yaml" else ".json"
    if not file_name.lower().endswith(ext):
        file_name += ext

    temp_dir = tempfile.gettempdir()
    path = os.path.join(temp_dir, file_name)

    try:
        with open(path, 'w', encoding='utf-8') as f:
            f.write(dump_document(output, fmt))
    except OSError as exc:
        logger.error("Error writing %s: %s", path, exc)
        return None, f"Error writing output: {str(exc)}", None

    return path, f"Done. {summarize_document(output)}. Saved to {path}", output
