"""Constants for the Open Charge Map provider."""

DEFAULT_API_URI = "/v3"

POI_ENDPOINT = "/poi/"

API_KEY_PARAM = "key"

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "User-Agent": "pyevchargefinder-openchargemap",
}

DEFAULT_MAX_RESULTS = 100

CONNECTION_TYPES: dict[int, tuple[str, ...]] = {
    1: ("Type1",),
    2: ("CHAdeMO",),
    8: ("Tesla",),
    25: ("Type2",),
    27: ("Tesla", "NACS"),
    30: ("Tesla",),
    32: ("CCS1",),
    33: ("CCS2",),
    1036: ("Type2",),
    1038: ("GB/T",),
    1039: ("GB/T",),
}

OPERATORS: dict[int, str] = {
    5: "ChargePoint",
    23: "Tesla Supercharger",
    29: "EVgo",
    52: "Blink",
    3299: "IONITY",
    3318: "Electrify America",
    3534: "Tesla Supercharger",
}

# Used when the response carries operator titles instead of known ids.
OPERATOR_TITLE_HINTS: tuple[tuple[str, str], ...] = (
    ("tesla", "Tesla Supercharger"),
    ("chargepoint", "ChargePoint"),
    ("evgo", "EVgo"),
    ("electrify america", "Electrify America"),
    ("ionity", "IONITY"),
    ("blink", "Blink"),
)

STATUS_TYPES: dict[int, str] = {
    10: "Available",
    20: "Busy",
    30: "Offline",
    50: "Available",
    75: "Busy",
    100: "Offline",
    150: "Offline",
    200: "Offline",
}
UNKNOWN_STATUS = "Available"

# Rough output by charging level when a connection lists no PowerKW.
LEVEL_POWER_KW: dict[int, int] = {1: 3, 2: 7, 3: 50}

DEFAULT_OPENING_HOURS = "Hours not listed"
