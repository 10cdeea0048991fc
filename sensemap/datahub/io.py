"""Helpers for resolving resource locators and caching remote resources."""

from __future__ import annotations

import hashlib
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Mapping, Optional
from urllib.parse import unquote, urlparse

import requests

from ..errors import ResourceLoadError
from .config import BUNDLED_RESOURCE_ROOT, DEFAULT_CACHE_ROOT

METADATA_SUFFIX = ".meta.json"
CLASSPATH_PREFIX = "classpath:"
REMOTE_SCHEMES = ("http", "https")


def sha256sum(path: Path) -> str:
    """Compute the SHA256 checksum for a file."""
    digest = hashlib.sha256()
    with path.open("rb") as handle:
        for chunk in iter(lambda: handle.read(1024 * 1024), b""):
            digest.update(chunk)
    return digest.hexdigest()


def read_metadata(path: Path) -> Mapping[str, Any]:
    """Load metadata JSON attached to a cached file, returning an empty mapping on failure."""
    if not path.exists():
        return {}
    try:
        return json.loads(path.read_text())
    except json.JSONDecodeError:
        return {}


def write_metadata(path: Path, payload: Mapping[str, Any]) -> None:
    """Persist metadata next to the cached file to skip redundant downloads."""
    path.write_text(json.dumps(payload, indent=2, sort_keys=True))


def needs_download(target: Path, expected_sha: Optional[str]) -> bool:
    """Determine whether the cached file must be fetched again."""
    if not target.exists():
        return True
    if not expected_sha:
        return False
    return sha256sum(target) != expected_sha


def download_stream(url: str, dest: Path) -> None:
    """Stream a remote file to disk atomically."""
    dest.parent.mkdir(parents=True, exist_ok=True)
    with requests.get(url, stream=True, timeout=60) as response:
        response.raise_for_status()
        with tempfile.NamedTemporaryFile(delete=False, dir=dest.parent) as tmp:
            for chunk in response.iter_content(chunk_size=8192):
                if chunk:
                    tmp.write(chunk)
    os.replace(tmp.name, dest)


def cache_path_for(url: str, cache_root: Path) -> Path:
    """Return the cache location used for ``url``."""
    digest = hashlib.sha256(url.encode("utf-8")).hexdigest()[:16]
    basename = Path(urlparse(url).path).name or "resource"
    return cache_root / f"{digest}-{basename}"


def fetch_remote(url: str, cache_root: Path = DEFAULT_CACHE_ROOT, force: bool = False) -> Path:
    """Download ``url`` into ``cache_root`` unless an intact copy is already cached."""
    target = cache_path_for(url, cache_root)
    meta_path = target.with_name(target.name + METADATA_SUFFIX)
    meta = read_metadata(meta_path)

    if force or needs_download(target, meta.get("sha256")):
        try:
            download_stream(url, target)
        except requests.RequestException as exc:
            raise ResourceLoadError(url, str(exc)) from exc
        write_metadata(meta_path, {"url": url, "sha256": sha256sum(target)})
    else:
        print(f"[datahub] {url} cached at {target}; skipping download.")
    return target


def resolve_resource(
    locator: str | Path,
    *,
    cache_root: Path = DEFAULT_CACHE_ROOT,
    resource_root: Optional[Path] = None,
    force: bool = False,
) -> Path:
    """Turn a resource locator into a readable local path.

    Supported forms are ``classpath:/relative/path`` (resolved against the
    bundled resource directory), ``file:`` URLs, ``http(s)://`` URLs (cached
    locally) and plain filesystem paths.
    """
    text = str(locator)
    if text.startswith(CLASSPATH_PREFIX):
        root = resource_root or BUNDLED_RESOURCE_ROOT
        path = root / text[len(CLASSPATH_PREFIX):].lstrip("/")
    else:
        parsed = urlparse(text)
        if parsed.scheme in REMOTE_SCHEMES:
            return fetch_remote(text, cache_root=cache_root, force=force)
        if parsed.scheme == "file":
            path = Path(unquote(parsed.path))
        else:
            path = Path(text).expanduser()

    if not path.is_file():
        raise ResourceLoadError(text, f"no such file: {path}")
    return path


__all__ = [
    "CLASSPATH_PREFIX",
    "METADATA_SUFFIX",
    "cache_path_for",
    "download_stream",
    "fetch_remote",
    "needs_download",
    "read_metadata",
    "resolve_resource",
    "sha256sum",
    "write_metadata",
]
