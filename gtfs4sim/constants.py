# coding: utf-8

"""
Constants shared by the gtfs4sim classes.

Distances are in the unit of the target coordinate system (metres for the
default UTM projection), times in seconds after midnight.
"""

# Coordinate reference systems
CRS_WGS84 = "EPSG:4326"  # GTFS stop coordinates
CRS_DEFAULT_TARGET = "EPSG:25832"  # ETRS89 / UTM zone 32N

# Reference date selecting the active GTFS services
DEFAULT_REFERENCE_DATE = "2019-12-11"

# Pseudo network
LINK_ID_PREFIX = "pt_"
PT_MODE = "pt"
DEFAULT_FREESPEED = 50 / 3.6  # m/s, used when no travel time can be derived
PSEUDO_LINK_CAPACITY = 100000.0  # veh/h
PSEUDO_LINK_LANES = 1.0

# Placeholder length written over implausible link lengths
FALLBACK_LINK_LENGTH = 1.234

# GTFS route_type -> transport mode
ROUTE_TYPE_MODES = {
    0: "tram",
    1: "subway",
    2: "rail",
    3: "bus",
    4: "ferry",
    5: "cablecar",
    6: "gondola",
    7: "funicular",
    11: "trolleybus",
    12: "monorail",
}

# Extended GTFS route types, by hundreds (100-199 is rail, 700-799 is bus...)
EXTENDED_ROUTE_TYPE_MODES = {
    1: "rail",
    2: "coach",
    4: "subway",
    5: "subway",
    7: "bus",
    8: "trolleybus",
    9: "tram",
    10: "ferry",
    11: "air",
    12: "ferry",
    13: "cablecar",
    14: "funicular",
    15: "taxi",
}

DEFAULT_MODE = "other"

# Vehicle type specifications per transport mode: seats, standing room, length (m)
VEHICLE_TYPE_SPECS = {
    "bus": {"seats": 45, "standing_room": 55, "length": 12.0},
    "trolleybus": {"seats": 45, "standing_room": 55, "length": 12.0},
    "coach": {"seats": 50, "standing_room": 0, "length": 13.0},
    "tram": {"seats": 70, "standing_room": 110, "length": 30.0},
    "subway": {"seats": 200, "standing_room": 500, "length": 110.0},
    "rail": {"seats": 400, "standing_room": 300, "length": 200.0},
    "ferry": {"seats": 250, "standing_room": 0, "length": 40.0},
}
DEFAULT_VEHICLE_TYPE_SPEC = {"seats": 100, "standing_room": 0, "length": 7.5}

# Output
OUTPUT_FOLDER = "output"
