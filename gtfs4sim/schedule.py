# coding: utf-8

"""
Transit schedule model: stop facilities and transit lines, each line owning its routes,
each route owning its ordered route stops and its departures. Route stops reference
stop facilities by id only; keeping those references valid is the job of whoever
removes facilities (see PlausibilityCorrector).
"""

import pandas as pd

from gtfs4sim import helpers as hlp

class TransitStopFacility:
    """A place where transit vehicles stop, located at a planar coordinate."""

    def __init__(self, stop_id: str, coord: tuple, name: str = "", link_id: str = None):
        self.id = stop_id
        self.coord = coord
        self.name = name
        self.link_id = link_id

    @property
    def coord(self) -> tuple:
        """tuple: The (x, y) coordinate of the stop. Non-finite values are accepted and left to the corrector."""
        return self._coord

    @coord.setter
    def coord(self, value):
        x, y = value
        self._coord = (float(x), float(y))

    def __repr__(self):
        return f"TransitStopFacility(id={self.id!r}, name={self.name!r}, coord={self.coord!r})"


class TransitRouteStop:
    """A stop along a transit route, with offsets in seconds from the start of the route."""

    def __init__(self, stop_facility_id: str, arrival_offset: float, departure_offset: float):
        self.stop_facility_id = stop_facility_id
        self.arrival_offset = arrival_offset
        self.departure_offset = departure_offset

    def __repr__(self):
        return f"TransitRouteStop(stop={self.stop_facility_id!r}, arrival={self.arrival_offset}, departure={self.departure_offset})"


class Departure:
    """A single run of a transit route, starting at departure_time (seconds after midnight)."""

    def __init__(self, departure_id: str, departure_time: float, vehicle_id: str = None):
        self.id = departure_id
        self.departure_time = departure_time
        self.vehicle_id = vehicle_id

    def __repr__(self):
        return f"Departure(id={self.id!r}, time={hlp.seconds_to_timestr(self.departure_time)})"


class TransitRoute:
    """An ordered stop pattern of a transit line, served by one or more departures."""

    def __init__(self, route_id: str, stops: list, transport_mode: str = "bus"):
        """
        Initializes the TransitRoute class.

        Args:
            route_id (str): The id of the route, unique within its line.
            stops (list): The ordered list of TransitRouteStop objects.
            transport_mode (str, optional): [Default: "bus"] The transport mode of the route.
        """
        self.id = route_id
        self.stops = stops
        self.transport_mode = transport_mode
        self.departures = {}
        self.link_ids = []

    @property
    def stops(self) -> list:
        """list: The ordered TransitRouteStop objects of the route."""
        return self._stops

    @stops.setter
    def stops(self, value: list):
        if len(value) < 2:
            raise ValueError("A transit route needs at least two stops.")
        self._stops = list(value)

    def add_departure(self, departure: Departure) -> Departure:
        if departure.id in self.departures:
            raise ValueError(f"ERROR \t Departure {departure.id} already exists in route {self.id}.")
        self.departures[departure.id] = departure
        return departure

    def __repr__(self):
        return f"TransitRoute(id={self.id!r}, mode={self.transport_mode!r}, stops={len(self.stops)}, departures={len(self.departures)})"


class TransitLine:
    """A transit line (a GTFS route) grouping one or more transit routes."""

    def __init__(self, line_id: str, name: str = ""):
        self.id = line_id
        self.name = name
        self.routes = {}

    def add_route(self, route: TransitRoute) -> TransitRoute:
        if route.id in self.routes:
            raise ValueError(f"ERROR \t Route {route.id} already exists in line {self.id}.")
        self.routes[route.id] = route
        return route

    def __repr__(self):
        return f"TransitLine(id={self.id!r}, name={self.name!r}, routes={len(self.routes)})"


class TransitSchedule:
    """A mutable container of stop facilities and transit lines, keyed by id."""

    def __init__(self):
        self._facilities = {}
        self._transit_lines = {}

    @property
    def facilities(self) -> dict:
        """dict: The stop facilities, keyed by stop id."""
        return self._facilities

    @property
    def transit_lines(self) -> dict:
        """dict: The transit lines, keyed by line id."""
        return self._transit_lines

    def add_stop_facility(self, facility: TransitStopFacility) -> TransitStopFacility:
        if facility.id in self._facilities:
            raise ValueError(f"ERROR \t Stop facility {facility.id} already exists in the schedule.")
        self._facilities[facility.id] = facility
        return facility

    def add_transit_line(self, line: TransitLine) -> TransitLine:
        if line.id in self._transit_lines:
            raise ValueError(f"ERROR \t Transit line {line.id} already exists in the schedule.")
        self._transit_lines[line.id] = line
        return line

    def remove_stop_facility(self, stop_id: str) -> bool:
        """Removes a stop facility. Returns False if no facility has this id."""
        return self._facilities.pop(stop_id, None) is not None

    def remove_transit_line(self, line_id: str) -> bool:
        """Removes a transit line with its routes, route stops and departures. Returns False if no line has this id."""
        return self._transit_lines.pop(line_id, None) is not None

    def iter_routes(self):
        """Yields (line, route) pairs over the whole schedule."""
        for line in self._transit_lines.values():
            for route in line.routes.values():
                yield line, route

    def n_departures(self) -> int:
        return sum(len(route.departures) for _, route in self.iter_routes())

    # Export

    def stops_to_dataframe(self) -> pd.DataFrame:
        rows = [{'stop_id': f.id, 'stop_name': f.name, 'x': f.coord[0], 'y': f.coord[1], 'link_id': f.link_id}
                for f in self._facilities.values()]
        return pd.DataFrame(rows, columns=['stop_id', 'stop_name', 'x', 'y', 'link_id'])

    def routes_to_dataframe(self) -> pd.DataFrame:
        """One row per route stop, in route order."""
        rows = []
        for line, route in self.iter_routes():
            for sequence, stop in enumerate(route.stops):
                rows.append({
                    'line_id': line.id,
                    'line_name': line.name,
                    'route_id': route.id,
                    'transport_mode': route.transport_mode,
                    'stop_sequence': sequence,
                    'stop_id': stop.stop_facility_id,
                    'arrival_offset': hlp.seconds_to_timestr(stop.arrival_offset),
                    'departure_offset': hlp.seconds_to_timestr(stop.departure_offset)
                })
        return pd.DataFrame(rows, columns=['line_id', 'line_name', 'route_id', 'transport_mode', 'stop_sequence',
                                           'stop_id', 'arrival_offset', 'departure_offset'])

    def departures_to_dataframe(self) -> pd.DataFrame:
        rows = [{'line_id': line.id, 'route_id': route.id, 'departure_id': dep.id,
                 'departure_time': hlp.seconds_to_timestr(dep.departure_time), 'vehicle_id': dep.vehicle_id}
                for line, route in self.iter_routes() for dep in route.departures.values()]
        return pd.DataFrame(rows, columns=['line_id', 'route_id', 'departure_id', 'departure_time', 'vehicle_id'])
