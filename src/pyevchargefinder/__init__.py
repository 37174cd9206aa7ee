"""pyEvChargeFinder package."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .cache import StationCache
from .client import Client
from .config import FinderConfig
from .drafts import Draft
from .exceptions import (
    ConfigError,
    FetchTimeoutError,
    InvalidQueryError,
    NetworkError,
    NotFoundError,
    ProviderError,
    PyEvChargeFinderError,
    SourceUnavailableError,
    ValidationError,
)
from .filters import (
    annotate_compatibility,
    apply_filters,
    filter_compatible,
    is_compatible,
    matches_connector,
    matches_network,
    matches_power,
    matches_status,
)
from .finder import StationFinder
from .models import (
    DEFAULT_FILTER_SETTINGS,
    DEFAULT_VEHICLE,
    ChargingStation,
    EvVehicle,
    FilterSettings,
    ProviderInfo,
    SavedLocation,
    StationQuery,
)
from .ranking import rank
from .storage import InMemoryStorage

try:
    __version__ = version("pyevchargefinder")
except PackageNotFoundError:  # pragma: no cover - not installed
    __version__ = "0.0.0"

__all__ = [
    "DEFAULT_FILTER_SETTINGS",
    "DEFAULT_VEHICLE",
    "ChargingStation",
    "Client",
    "ConfigError",
    "Draft",
    "EvVehicle",
    "FetchTimeoutError",
    "FilterSettings",
    "FinderConfig",
    "InMemoryStorage",
    "InvalidQueryError",
    "NetworkError",
    "NotFoundError",
    "ProviderError",
    "ProviderInfo",
    "PyEvChargeFinderError",
    "SavedLocation",
    "SourceUnavailableError",
    "StationCache",
    "StationFinder",
    "StationQuery",
    "ValidationError",
    "__version__",
    "annotate_compatibility",
    "apply_filters",
    "filter_compatible",
    "is_compatible",
    "matches_connector",
    "matches_network",
    "matches_power",
    "matches_status",
    "rank",
]
