"""
YAML persistence for the configuration document.

Reading:  bytes -> YAML -> null pruning -> ConfigDocument
Writing:  ConfigDocument -> plain dict -> YAML -> file (parent dir created)
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from kubestate.config.models import ConfigDocument
from kubestate.config.paths import ensure_dir_path
from kubestate.config.types import DEFAULT_DIR_MODE, DEFAULT_FILE_MODE, DecodeError
from kubestate.utils import get_logger

logger = get_logger(__name__)


def _drop_nulls(value: Any) -> Any:
    """Remove null mapping entries so missing and null keys both default."""
    if isinstance(value, dict):
        return {k: _drop_nulls(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [_drop_nulls(v) for v in value]
    return value


def decode_document(raw: bytes | str, source: str = "<memory>") -> ConfigDocument:
    """
    Decode YAML text into a ConfigDocument.

    Raises:
        DecodeError: If the text is not YAML or does not fit the schema
    """
    try:
        content = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise DecodeError(source, str(e)) from e

    if content is None:
        content = {}
    if not isinstance(content, dict):
        raise DecodeError(source, "top level must be a mapping")

    try:
        return ConfigDocument.model_validate(_drop_nulls(content))
    except ValidationError as e:
        raise DecodeError(source, str(e)) from e


def read_document(path: str | Path) -> ConfigDocument:
    """
    Load a ConfigDocument from disk.

    Raises:
        OSError: If the file cannot be read
        DecodeError: If the content is invalid
    """
    with open(path, "rb") as f:
        raw = f.read()
    logger.debug(f"Read {len(raw)} bytes from {path}")
    return decode_document(raw, str(path))


def encode_document(doc: ConfigDocument) -> str:
    """Serialize a ConfigDocument to YAML text."""
    return yaml.safe_dump(doc.to_yaml_dict(), sort_keys=False, default_flow_style=False)


def write_document(
    doc: ConfigDocument,
    path: str | Path,
    dir_mode: int = DEFAULT_DIR_MODE,
    file_mode: int = DEFAULT_FILE_MODE,
) -> None:
    """
    Write a ConfigDocument to disk.

    The parent directory is created first; a missing directory is an error,
    never a silent skip.

    Raises:
        OSError: If the directory or file cannot be written
    """
    ensure_dir_path(path, dir_mode)
    try:
        content = encode_document(doc)
    except yaml.YAMLError as e:
        logger.error(f"Unable to encode config file {path}: {e}")
        raise

    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, file_mode)
    with os.fdopen(fd, "w") as f:
        f.write(content)
    logger.debug(f"Saved config to {path}")
