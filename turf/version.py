from __future__ import annotations

import importlib.metadata


def get_version_string() -> str:
    try:
        return importlib.metadata.version("turf-editor")
    except importlib.metadata.PackageNotFoundError:
        return "unknown"
