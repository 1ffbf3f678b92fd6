from __future__ import annotations

import importlib.metadata
from typing import NamedTuple, Optional


class BuildInfo(NamedTuple):
    version: Optional[str]
    commit: Optional[str]
    date: Optional[str]


def _from_embedded_file() -> Optional[BuildInfo]:
    # Generated at build time by hatch build hook
    try:
        from . import _build_info  # type: ignore
    except ImportError:
        return None
    commit = getattr(_build_info, "COMMIT", None)
    date = getattr(_build_info, "DATE", None)
    if commit or date:
        return BuildInfo(version=_installed_version(), commit=commit, date=date)
    return None


def _installed_version() -> Optional[str]:
    try:
        return importlib.metadata.version("undoredo")
    except importlib.metadata.PackageNotFoundError:
        return None


def get_build_info() -> BuildInfo:
    # Priority: embedded file -> installed metadata -> unknowns
    info = _from_embedded_file()
    if info:
        return info
    return BuildInfo(version=_installed_version(), commit=None, date=None)


def get_version_string() -> str:
    info = get_build_info()
    version = info.version or "unknown"
    if not info.commit:
        return version
    # Use short (7-character) git hashes
    return f"{version} ({info.commit[:7]} {info.date or 'unknown'})"
