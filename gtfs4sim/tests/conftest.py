# coding: utf-8

"""Shared fixtures: small GTFS archives written to tmp_path and hand-built scenarios."""

import zipfile

import pytest

from gtfs4sim.network import Link, Node
from gtfs4sim.scenario import Scenario
from gtfs4sim.schedule import Departure, TransitLine, TransitRoute, TransitRouteStop, TransitStopFacility

# Reference date used in the tests: 2019-12-11 is a Wednesday.

STOPS = """stop_id,stop_name,stop_lat,stop_lon,location_type,parent_station
S1,Alpha,47.0,8.0,0,ST
S2,Beta,47.01,8.01,0,
S3,Gamma,47.02,8.02,0,
S4,Alpha,47.0,8.0,0,ST
ST,Alpha Station,47.0,8.0,1,
"""

ROUTES = """route_id,agency_id,route_short_name,route_long_name,route_type
R1,A,1,Line One,3
R2,A,,Tram Two,0
"""

TRIPS = """route_id,service_id,trip_id
R1,WD,T1
R1,WD,T2
R1,WD,T3
R1,WE,T4
R2,WD,F1
"""

STOP_TIMES = """trip_id,arrival_time,departure_time,stop_id,stop_sequence
T1,08:00:00,08:00:00,S1,1
T1,08:05:00,08:06:00,S2,2
T1,08:10:00,08:10:00,S3,3
T2,09:00:00,09:00:00,S1,1
T2,09:05:00,09:06:00,S2,2
T2,09:10:00,09:10:00,S3,3
T3,10:00:00,10:00:00,S3,1
T3,,,S2,2
T3,10:10:00,10:10:00,S1,3
T4,11:00:00,11:00:00,S1,1
T4,11:10:00,11:10:00,S3,2
F1,06:00:00,06:00:00,S1,1
F1,06:04:00,06:04:00,S3,2
"""

CALENDAR = """service_id,monday,tuesday,wednesday,thursday,friday,saturday,sunday,start_date,end_date
WD,1,1,1,1,1,0,0,20190101,20191231
WE,0,0,0,0,0,1,1,20190101,20191231
"""

CALENDAR_DATES = """service_id,date,exception_type
WD,20191225,2
WE,20191212,1
"""

FREQUENCIES = """trip_id,start_time,end_time,headway_secs
F1,06:00:00,07:00:00,1200
"""

FEED_INFO = """feed_publisher_name,feed_lang,feed_start_date,feed_end_date
Test Transit,en,20190101,20191231
"""

GTFS_FILES = {
    "stops.txt": STOPS,
    "routes.txt": ROUTES,
    "trips.txt": TRIPS,
    "stop_times.txt": STOP_TIMES,
    "calendar.txt": CALENDAR,
    "calendar_dates.txt": CALENDAR_DATES,
    "frequencies.txt": FREQUENCIES,
    "feed_info.txt": FEED_INFO,
}

# Implausible additions: S5 has no longitude (coordinate (NaN, 7.0) with the identity
# transformation), S6 lies exactly on S3.
DIRTY_STOPS = STOPS + """S5,Broken,7.0,,0,
S6,Gamma bis,47.02,8.02,0,
"""
DIRTY_ROUTES = ROUTES + """R3,A,3,Line Three,3
R4,A,4,Line Four,3
"""
DIRTY_TRIPS = TRIPS + """R3,WD,D1
R4,WD,D2
"""
DIRTY_STOP_TIMES = STOP_TIMES + """D1,08:00:00,08:00:00,S1,1
D1,08:05:00,08:05:00,S5,2
D1,08:10:00,08:10:00,S3,3
D2,12:00:00,12:00:00,S3,1
D2,12:02:00,12:02:00,S6,2
"""


@pytest.fixture
def make_gtfs_zip(tmp_path):
    """Factory writing a GTFS zip archive; files can be replaced, dropped or put in a sub folder."""
    def _make(overrides=None, drop=(), folder="", name="gtfs.zip"):
        files = dict(GTFS_FILES)
        files.update(overrides or {})
        path = tmp_path / name
        with zipfile.ZipFile(path, "w") as archive:
            for filename, content in files.items():
                if filename in drop:
                    continue
                archive.writestr(f"{folder}{filename}", content)
        return path
    return _make

@pytest.fixture
def gtfs_zip(make_gtfs_zip):
    return make_gtfs_zip()

@pytest.fixture
def dirty_gtfs_zip(make_gtfs_zip):
    return make_gtfs_zip({
        "stops.txt": DIRTY_STOPS,
        "routes.txt": DIRTY_ROUTES,
        "trips.txt": DIRTY_TRIPS,
        "stop_times.txt": DIRTY_STOP_TIMES,
    }, name="dirty_gtfs.zip")


def build_scenario(stops, lines, links=()):
    """
    Builds a scenario by hand.

    Args:
        stops (dict): stop id -> (x, y)
        lines (dict): line id -> list of stop id sequences, one per route
        links (iterable): (link id, length) pairs, all between two dummy nodes
    """
    scenario = Scenario()
    schedule = scenario.transit_schedule

    for stop_id, coord in stops.items():
        schedule.add_stop_facility(TransitStopFacility(stop_id, coord, name=f"Stop {stop_id}"))

    for line_id, sequences in lines.items():
        line = schedule.add_transit_line(TransitLine(line_id, name=line_id))
        for n, sequence in enumerate(sequences, start=1):
            route_stops = [TransitRouteStop(stop_id, 60.0 * i, 60.0 * i) for i, stop_id in enumerate(sequence)]
            route = line.add_route(TransitRoute(f"{line_id}_{n}", route_stops))
            route.add_departure(Departure(f"{line_id}_{n}_dep", 8 * 3600.0))

    if links:
        a = scenario.network.add_node(Node("a", (0.0, 0.0)))
        b = scenario.network.add_node(Node("b", (100.0, 0.0)))
        for link_id, length in links:
            scenario.network.add_link(Link(link_id, a, b, length))

    return scenario

@pytest.fixture
def clean_scenario():
    return build_scenario(
        stops={"A": (0.0, 0.0), "B": (100.0, 0.0), "C": (200.0, 50.0)},
        lines={"L1": [["A", "B", "C"], ["C", "B", "A"]], "L2": [["A", "C"]]},
        links=[("l1", 100.0), ("l2", 111.8)],
    )

@pytest.fixture
def scenario_factory():
    return build_scenario
