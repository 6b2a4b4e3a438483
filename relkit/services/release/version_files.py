"""Rewrite version numbers inside the files of a release checkout.

JSON files are rewritten with 2-space indentation and a trailing newline,
keeping key order. Text files only have their version markers replaced;
everything else is left byte-for-byte as read.
"""

from __future__ import annotations

import json
import re
from pathlib import Path

from relkit.core.result import Err, Ok, Result
from relkit.core.structured import StrDict, as_str_dict, get_str
from relkit.platform.files import atomic_write_text
from relkit.services.release.errors import ConfigInvalid, FileUpdateFailed, InvalidVersion
from relkit.services.release.semver import SemVer, parse_version

__all__ = [
    "read_manifest_version",
    "replace_version_marker",
    "write_docs_version",
    "write_manifest_version",
    "write_version_marker",
]

_DIGITS = r"\d+\.\d+\.\d+"


def read_manifest_version(path: Path) -> Result[SemVer, ConfigInvalid | InvalidVersion]:
    """Read the current version from a JSON manifest."""
    data = _read_json_object(path)
    if isinstance(data, Err):
        reason = f"cannot read version from {path.name}: {data.error.reason}"
        return Err(ConfigInvalid(reason=reason, path=path))

    raw = get_str(data.value, "version")
    if raw is None:
        return Err(InvalidVersion(value="", path=path))
    parsed = parse_version(raw)
    if parsed is None:
        return Err(InvalidVersion(value=raw, path=path))
    return Ok(parsed)


def write_manifest_version(path: Path, version: str) -> Result[None, FileUpdateFailed]:
    """Set the top-level ``version`` field of a JSON manifest."""
    data = _read_json_object(path)
    if isinstance(data, Err):
        return data

    updated = dict(data.value)
    updated["version"] = version
    return _write_json(path, updated)


def write_docs_version(path: Path, key: str, version: str) -> Result[None, FileUpdateFailed]:
    """Set ``vars[key]`` in a docs config, creating ``vars`` if absent."""
    data = _read_json_object(path)
    if isinstance(data, Err):
        return data

    raw_vars = data.value.get("vars", {})
    variables = as_str_dict(raw_vars)
    if variables is None:
        return Err(FileUpdateFailed(path=path, reason="'vars' is not an object"))

    updated = dict(data.value)
    updated["vars"] = {**variables, key: version}
    return _write_json(path, updated)


def replace_version_marker(text: str, prefix: str, version: str) -> tuple[str, int]:
    """Replace every ``<prefix>x.y.z<c>`` with ``<prefix><version><c>``.

    Returns:
        The new text and the number of replacements made.
    """
    pattern = re.compile(f"({prefix}){_DIGITS}(.)")
    return pattern.subn(lambda m: f"{m.group(1)}{version}{m.group(2)}", text)


def write_version_marker(path: Path, prefix: str, version: str) -> Result[int, FileUpdateFailed]:
    try:
        with path.open("r", encoding="utf-8", newline="") as handle:
            text = handle.read()
    except (OSError, UnicodeDecodeError) as e:
        return Err(FileUpdateFailed(path=path, reason=str(e)))

    updated, count = replace_version_marker(text, prefix, version)
    if updated != text:
        written = _write_text(path, updated)
        if isinstance(written, Err):
            return written
    return Ok(count)


def _read_json_object(path: Path) -> Result[StrDict, FileUpdateFailed]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return Err(FileUpdateFailed(path=path, reason=str(e)))

    try:
        obj: object = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(FileUpdateFailed(path=path, reason=f"invalid JSON: {e}"))

    data = as_str_dict(obj)
    if data is None:
        return Err(FileUpdateFailed(path=path, reason="JSON root is not an object"))
    return Ok(data)


def _write_json(path: Path, data: StrDict) -> Result[None, FileUpdateFailed]:
    return _write_text(path, json.dumps(data, indent=2, ensure_ascii=False) + "\n")


def _write_text(path: Path, content: str) -> Result[None, FileUpdateFailed]:
    try:
        atomic_write_text(path, content, encoding="utf-8")
    except OSError as e:
        return Err(FileUpdateFailed(path=path, reason=str(e)))
    return Ok(None)
