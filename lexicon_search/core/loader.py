"""Loading dictionary entries from JSON sources."""

import json
import os
from typing import Any, List, Optional

import structlog
from pydantic import ValidationError

from ..models.entry import Entry
from .exceptions import LexiconFormatError

logger = structlog.get_logger(__name__)


def parse_entries(items: Any, source: str = "<memory>") -> List[Entry]:
    """
    Validate raw JSON items and turn them into entries.

    Args:
        items: Decoded JSON, expected to be a list of entry objects
        source: Name of the data source, used in error messages

    Returns:
        List of entries in source order
    """
    if not isinstance(items, list):
        raise LexiconFormatError(f"{source}: expected a JSON array of entries")

    entries = []
    for position, item in enumerate(items):
        if not isinstance(item, dict):
            raise LexiconFormatError(f"{source}: item {position} is not an object")
        if not isinstance(item.get("lemma"), str):
            raise LexiconFormatError(f"{source}: item {position} has no string 'lemma'")
        if not isinstance(item.get("senses"), list):
            raise LexiconFormatError(f"{source}: item {position} has no 'senses' array")

        try:
            entries.append(Entry.model_validate(item))
        except ValidationError as e:
            raise LexiconFormatError(f"{source}: item {position} is invalid: {e}") from e

    return entries


def _read_json(path: str) -> Any:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise LexiconFormatError(f"{path}: not valid UTF-8 JSON: {e}") from e


def load_entries_from_file(path: str) -> List[Entry]:
    """
    Load entries from a single JSON file.

    Args:
        path: Path to a JSON array of entry objects

    Returns:
        List of entries
    """
    entries = parse_entries(_read_json(path), source=path)
    logger.info("Lexicon file loaded", path=path, total_entries=len(entries))
    return entries


def load_entries_from_parts(
    manifest_path: str,
    parts_dir: Optional[str] = None
) -> Optional[List[Entry]]:
    """
    Load entries from a manifest of sharded fragment files.

    The manifest is a JSON array of fragment file names. Fragments are read
    from ``parts_dir`` (default: a ``parts`` directory beside the manifest)
    and concatenated in manifest order.

    Args:
        manifest_path: Path to the manifest
        parts_dir: Directory holding the fragments

    Returns:
        List of entries, or None if there is no usable manifest
    """
    if not os.path.isfile(manifest_path):
        return None

    try:
        parts = _read_json(manifest_path)
    except LexiconFormatError as e:
        logger.warning("Ignoring unreadable parts manifest", path=manifest_path, error=str(e))
        return None

    if not isinstance(parts, list) or not parts:
        return None

    if parts_dir is None:
        parts_dir = os.path.join(os.path.dirname(manifest_path), "parts")

    entries: List[Entry] = []
    for part in parts:
        part_path = os.path.join(parts_dir, str(part))
        if not os.path.isfile(part_path):
            raise LexiconFormatError(
                f"{manifest_path}: fragment '{part}' not found in {parts_dir}"
            )
        entries.extend(parse_entries(_read_json(part_path), source=part_path))

    logger.info(
        "Lexicon fragments loaded",
        manifest=manifest_path,
        total_parts=len(parts),
        total_entries=len(entries)
    )
    return entries


def load_lexicon(data_path: str, parts_path: Optional[str] = None) -> List[Entry]:
    """
    Load the lexicon, preferring sharded fragments over the single file.

    Args:
        data_path: Path to the single-file lexicon
        parts_path: Path to the fragments manifest

    Returns:
        List of entries
    """
    if parts_path:
        chunked = load_entries_from_parts(parts_path)
        if chunked is not None:
            return chunked

    return load_entries_from_file(data_path)
