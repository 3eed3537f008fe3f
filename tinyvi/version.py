from __future__ import annotations

import importlib.metadata
from typing import NamedTuple, Optional


class BuildInfo(NamedTuple):
    version: str
    commit: Optional[str]
    date: Optional[str]


def _package_version() -> str:
    try:
        return importlib.metadata.version("tinyvi")
    except importlib.metadata.PackageNotFoundError:
        return "0+unknown"


def _from_embedded_file() -> tuple[Optional[str], Optional[str]]:
    # Generated at build time by hatch build hook
    try:
        from . import _build_info  # type: ignore
    except ImportError:
        return None, None
    return getattr(_build_info, "COMMIT", None), getattr(_build_info, "DATE", None)


def get_build_info() -> BuildInfo:
    commit, date = _from_embedded_file()
    return BuildInfo(version=_package_version(), commit=commit, date=date)


def get_version_string() -> str:
    info = get_build_info()
    if not info.commit:
        return f"tinyvi {info.version}"
    # Use short (7-character) git hashes
    date = info.date or "unknown"
    return f"tinyvi {info.version} ({info.commit[:7]} {date})"
