"""Vocabularies for the synthetic provider."""

STATION_NAMES = (
    "Tesla Supercharger",
    "ChargePoint Station",
    "EVgo Fast Charging",
    "Electrify America",
    "IONITY High Power Charging",
    "Blink Charging Station",
    "GreenWay Charging Hub",
    "Shell Recharge",
    "EV Connect",
    "City Power Station",
)

ADDRESSES = (
    "Shopping Center Parking Lot",
    "City Hall Parking",
    "Metro Station Parking",
    "Mall Parking Garage",
    "Highway Rest Area",
    "Downtown Parking Structure",
    "Hotel Visitor Parking",
    "Grocery Store Parking",
    "Office Park",
    "Public Library Parking",
)

OPENING_HOURS = (
    "Open 24/7",
    "Open 6 AM - 11 PM",
    "Open 8 AM - 10 PM",
    "Open 7 AM - 9 PM",
    "Open 9 AM - 8 PM",
)

# GB/T is never generated.
GENERATED_CONNECTORS = ("CCS1", "CCS2", "Type1", "Type2", "CHAdeMO", "Tesla", "NACS")

POWER_OPTIONS_KW = (50, 75, 100, 150, 250, 350)

MIN_STATIONS = 5
MAX_STATIONS = 10
MAX_CONNECTORS = 3

# Candidates are placed within this share of the requested radius.
RADIUS_SLACK = 0.8

DETAIL_ADDRESS = "123 Example Street, Anytown, USA"
DETAIL_LATITUDE = 37.7749
DETAIL_LONGITUDE = -122.4194
