"""Station catalog discovery and manifest loading."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from importlib import resources
from importlib.metadata import PackageNotFoundError
from importlib.resources.abc import Traversable

from ..exceptions import ProviderError
from ..models import ProviderInfo

_LOGGER = logging.getLogger(__name__)

MANIFEST_FILENAME = "manifest.json"
SCHEMA_FILENAME = "manifest.schema.json"
_REQUIRED_KEYS = ("id", "name", "stable_ids", "requires_api_key")
_MANIFEST_CACHE: tuple[ProviderManifest, ...] | None = None


@dataclass(frozen=True, slots=True)
class ProviderManifest:
    id: str
    name: str
    stable_ids: bool
    requires_api_key: bool = False
    default_base_url: str | None = None


def _provider_root() -> Traversable:
    return resources.files("pyevchargefinder.provider")


def load_manifest_schema() -> dict:
    schema_path = _provider_root() / SCHEMA_FILENAME
    return json.loads(schema_path.read_text(encoding="utf-8"))


def _require_bool(data: dict, key: str) -> bool:
    value = data[key]
    if not isinstance(value, bool):
        raise ProviderError(f"Provider manifest {key} must be a boolean.")
    return value


def _build_manifest(data: dict, folder_name: str) -> ProviderManifest:
    if not isinstance(data, dict):
        raise ProviderError("Provider manifest must be a JSON object.")
    missing = [key for key in _REQUIRED_KEYS if key not in data]
    if missing:
        raise ProviderError(f"Provider manifest missing keys: {', '.join(missing)}.")
    provider_id = data["id"]
    name = data["name"]
    if not isinstance(provider_id, str) or not provider_id:
        raise ProviderError("Provider manifest id must be a non-empty string.")
    if provider_id != folder_name:
        raise ProviderError("Provider manifest id must match its folder name.")
    if not isinstance(name, str) or not name:
        raise ProviderError("Provider manifest name must be a non-empty string.")
    default_base_url = data.get("default_base_url")
    if default_base_url is not None and (
        not isinstance(default_base_url, str) or not default_base_url
    ):
        raise ProviderError("Provider manifest default_base_url must be a non-empty string.")
    return ProviderManifest(
        id=provider_id,
        name=name,
        stable_ids=_require_bool(data, "stable_ids"),
        requires_api_key=_require_bool(data, "requires_api_key"),
        default_base_url=default_base_url,
    )


def iter_manifest_files() -> Iterable[tuple[str, Traversable]]:
    root = _provider_root()
    for entry in root.iterdir():
        if not entry.is_dir():
            continue
        manifest_path = entry / MANIFEST_FILENAME
        if manifest_path.is_file():
            yield entry.name, manifest_path


def load_manifests() -> list[ProviderManifest]:
    global _MANIFEST_CACHE
    if _MANIFEST_CACHE is not None:
        return list(_MANIFEST_CACHE)
    manifests: list[ProviderManifest] = []
    try:
        for folder_name, manifest_path in iter_manifest_files():
            try:
                data = json.loads(manifest_path.read_text(encoding="utf-8"))
            except json.JSONDecodeError as exc:
                raise ProviderError("Provider manifest is not valid JSON.") from exc
            manifests.append(_build_manifest(data, folder_name))
    except (ModuleNotFoundError, PackageNotFoundError) as exc:
        _MANIFEST_CACHE = None
        raise ProviderError("Provider package was not found.") from exc
    _LOGGER.debug("Loaded %s provider manifests", len(manifests))
    _MANIFEST_CACHE = tuple(sorted(manifests, key=lambda manifest: manifest.id))
    return list(_MANIFEST_CACHE)


def clear_manifest_cache() -> None:
    """Clear cached provider manifests (used in tests)."""
    global _MANIFEST_CACHE
    _MANIFEST_CACHE = None


def list_providers() -> list[ProviderInfo]:
    return [
        ProviderInfo(id=manifest.id, stable_ids=manifest.stable_ids)
        for manifest in load_manifests()
    ]


def get_manifest(provider_id: str) -> ProviderManifest:
    for manifest in load_manifests():
        if manifest.id == provider_id:
            return manifest
    raise ProviderError(f"Provider {provider_id} not found.")
