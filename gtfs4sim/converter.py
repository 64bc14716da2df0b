# coding: utf-8

"""
GtfsConverter.
Converts a GTFSFeed into a transit schedule for a given reference date: stops become stop
facilities (projected with the supplied coordinate transformation), GTFS routes become transit
lines, and trips sharing the same stop sequence are grouped into one transit route with one
departure per trip (or per headway for frequency-based trips).
"""

import numpy as np
import pandas as pd

from gtfs4sim import constants as cst
from gtfs4sim import helpers as hlp
from gtfs4sim.gtfsfeed import GTFSFeed
from gtfs4sim.scenario import Scenario
from gtfs4sim.schedule import Departure, TransitLine, TransitRoute, TransitRouteStop, TransitStopFacility

def route_type_to_mode(route_type) -> str:
    """ Maps a basic or extended GTFS route_type onto a transport mode
    """
    if route_type is None or pd.isna(route_type):
        return cst.DEFAULT_MODE
    route_type = int(route_type)
    if route_type in cst.ROUTE_TYPE_MODES:
        return cst.ROUTE_TYPE_MODES[route_type]
    if route_type >= 100:
        return cst.EXTENDED_ROUTE_TYPE_MODES.get(route_type // 100, cst.DEFAULT_MODE)
    return cst.DEFAULT_MODE


def unique_departure_id(route, departure_id: str) -> str:
    """ Returns departure_id, suffixed with _1, _2... when the route already has a departure with this id
    """
    if departure_id not in route.departures:
        return departure_id
    n = 1
    while f"{departure_id}_{n}" in route.departures:
        n += 1
    print(f"ALERT \t Departure id {departure_id} already used in route {route.id}. Renamed to {departure_id}_{n}.")
    return f"{departure_id}_{n}"


class GtfsConverter:
    """
    A class converting GTFS data into the transit schedule of a scenario.

    Attributes:
        feed (GTFSFeed): The GTFS feed to convert.
        scenario (Scenario): The scenario whose transit schedule is populated.
        transformation (callable): Maps (lon, lat) onto planar (x, y).
        merge_stops (bool): Whether stops with the same name and location are merged.
    """

    def __init__(self, feed: GTFSFeed, scenario: Scenario, transformation, merge_stops: bool = False):
        self.feed = feed
        self.scenario = scenario
        self.transformation = transformation
        self.merge_stops = merge_stops
        self.date = cst.DEFAULT_REFERENCE_DATE

        self._stop_id_map = {}

    # Properties and Setters

    @property
    def date(self) -> pd.Timestamp:
        """pd.Timestamp: The reference date selecting the active services."""
        return self._date

    @date.setter
    def date(self, value):
        self._date = hlp.parse_gtfs_date(value) if isinstance(value, str) else pd.Timestamp(value)

    # Conversion

    def convert(self):
        """ Converts stops, then the trips active on the reference date
        """
        print(f"INFO \t Converting the GTFS feed for the {self.date.date()}...")

        self.convert_stops()
        self.convert_trips()

        schedule = self.scenario.transit_schedule
        n_routes = sum(1 for _ in schedule.iter_routes())
        print(f"INFO \t Converted stops: {len(schedule.facilities)}")
        print(f"\t Converted lines: {len(schedule.transit_lines)} - Routes: {n_routes} - Departures: {schedule.n_departures()}")

    def convert_stops(self):
        """ Creates one stop facility per GTFS stop (stations excluded)
        """
        schedule = self.scenario.transit_schedule
        stops = self.feed.stops[self.feed.stops['location_type'] != 1]

        duplicated = stops['stop_id'].duplicated()
        if duplicated.any():
            print(f"ALERT \t {duplicated.sum()} duplicated stop id(s) in stops.txt. Only the first occurrence is kept.")
            stops = stops[~duplicated]

        merged = {}
        n_merged = 0
        for stop in stops.itertuples(index=False):
            key = (stop.stop_name, stop.stop_lat, stop.stop_lon)
            if self.merge_stops and hlp.is_finite(stop.stop_lat) and hlp.is_finite(stop.stop_lon):
                if key in merged:
                    self._stop_id_map[stop.stop_id] = merged[key]
                    n_merged += 1
                    continue
                merged[key] = stop.stop_id

            x, y = self.transformation(stop.stop_lon, stop.stop_lat)
            schedule.add_stop_facility(TransitStopFacility(stop.stop_id, (x, y), name=stop.stop_name))
            self._stop_id_map[stop.stop_id] = stop.stop_id

        if self.merge_stops:
            print(f"INFO \t Merged {n_merged} duplicated stop(s).")

    def convert_trips(self):
        """ Groups the active trips into transit lines, routes and departures
        """
        feed = self.feed
        schedule = self.scenario.transit_schedule

        service_ids = feed.active_service_ids(self.date)
        trips = feed.trips[feed.trips['service_id'].isin(service_ids)]
        unidentified = trips[['route_id', 'trip_id']].isna().any(axis=1)
        if unidentified.any():
            print(f"ALERT \t {unidentified.sum()} active trip(s) without route_id or trip_id skipped.")
            trips = trips[~unidentified]
        print(f"INFO \t Active services: {len(service_ids)} - Active trips: {len(trips)} out of {len(feed.trips)}")
        if trips.empty:
            print(f"ALERT \t No trip is active on the {self.date.date()}. The transit schedule has no lines.")
            return

        stop_times = self._prepare_stop_times(trips['trip_id'])

        unknown = ~stop_times['stop_id'].isin(self._stop_id_map.keys())
        if unknown.any():
            print(f"ALERT \t {stop_times.loc[unknown, 'stop_id'].nunique()} stop id(s) referenced in stop_times.txt are not defined in stops.txt.")
        stop_times['facility_id'] = stop_times['stop_id'].map(lambda s: self._stop_id_map.get(s, s))

        route_of_trip = dict(zip(trips['trip_id'], trips['route_id']))
        frequencies = feed.frequencies.groupby('trip_id') if not feed.frequencies.empty else None
        frequency_trips = set(feed.frequencies['trip_id'])

        # (route_id, stop pattern) -> list of (start time, trip_id, stop_times of the trip)
        patterns = {}
        n_skipped = 0
        for trip_id, trip_stop_times in stop_times.groupby('trip_id', sort=False):
            start = trip_stop_times['departure_s'].iloc[0]
            if len(trip_stop_times) < 2 or np.isnan(start):
                n_skipped += 1
                continue
            key = (route_of_trip[trip_id], tuple(trip_stop_times['facility_id']))
            patterns.setdefault(key, []).append((start, trip_id, trip_stop_times))

        if n_skipped:
            print(f"ALERT \t {n_skipped} trip(s) skipped: fewer than two stops or no usable times.")

        routes = feed.routes.drop_duplicates('route_id').set_index('route_id')
        line_route_counter = {}
        for (route_id, _), runs in sorted(patterns.items(), key=lambda item: (item[0][0], min(r[0] for r in item[1]))):
            runs.sort(key=lambda r: r[0])

            line = schedule.transit_lines.get(route_id)
            if line is None:
                line = schedule.add_transit_line(TransitLine(route_id, name=self._line_name(routes, route_id)))

            line_route_counter[route_id] = line_route_counter.get(route_id, 0) + 1
            route_type = routes.at[route_id, 'route_type'] if route_id in routes.index else None

            start, _, template = runs[0]
            route_stops = [TransitRouteStop(facility_id, arrival - start, departure - start)
                           for facility_id, arrival, departure in zip(template['facility_id'], template['arrival_s'], template['departure_s'])]
            # the route starts with the departure from its first stop
            route_stops[0].arrival_offset = max(route_stops[0].arrival_offset, 0)
            route = line.add_route(TransitRoute(f"{route_id}_{line_route_counter[route_id]}", route_stops,
                                                transport_mode=route_type_to_mode(route_type)))

            for trip_start, trip_id, _ in runs:
                if trip_id in frequency_trips:
                    self._add_frequency_departures(route, trip_id, frequencies.get_group(trip_id))
                else:
                    route.add_departure(Departure(unique_departure_id(route, trip_id), trip_start))

    # Helper methods

    def _prepare_stop_times(self, trip_ids) -> pd.DataFrame:
        """Stop times of the given trips, with missing times filled from the other time column
        and then interpolated within each trip (GTFS allows blank intermediate times)."""
        st = self.feed.stop_times[self.feed.stop_times['trip_id'].isin(trip_ids)].copy()
        st['arrival_s'] = st['arrival_s'].fillna(st['departure_s'])
        st['departure_s'] = st['departure_s'].fillna(st['arrival_s'])
        for col in ['arrival_s', 'departure_s']:
            st[col] = st.groupby('trip_id')[col].transform(lambda s: s.interpolate().ffill().bfill())
        return st

    @staticmethod
    def _line_name(routes, route_id) -> str:
        if route_id not in routes.index:
            return ""
        for col in ['route_short_name', 'route_long_name']:
            name = routes.at[route_id, col]
            if not pd.isna(name) and str(name).strip():
                return str(name).strip()
        return ""

    @staticmethod
    def _add_frequency_departures(route, trip_id, trip_frequencies):
        """One departure per headway in [start_time, end_time) of each frequencies.txt row."""
        k = 0
        for row in trip_frequencies.sort_values('start_s').itertuples(index=False):
            if np.isnan(row.start_s) or np.isnan(row.end_s) or row.headway_secs <= 0:
                continue
            time = row.start_s
            while time < row.end_s:
                route.add_departure(Departure(unique_departure_id(route, f"{trip_id}_{k}"), time))
                time += row.headway_secs
                k += 1


def convert_feed(feed: GTFSFeed, scenario: Scenario, date, transformation, merge_stops: bool = False):
    """ Default schedule conversion: populates scenario.transit_schedule from the feed
    """
    converter = GtfsConverter(feed, scenario, transformation, merge_stops)
    converter.date = date
    converter.convert()
