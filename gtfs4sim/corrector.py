# coding: utf-8

"""
PlausibilityCorrector.
Repairs and prunes the implausible values left by the conversion of a GTFS feed:

- links whose length is not a finite positive number get a fixed placeholder length,
- stops whose coordinate is not finite are removed, together with every transit line
  having a route that serves them (the whole line goes, including its valid stops).

Route stops pointing to a stop that is not in the schedule at all ("dangling references")
are reported separately. They are kept unless remove_dangling_lines is set, and only
their removal counts as a correction.
"""

import warnings
from dataclasses import dataclass, field

from gtfs4sim import constants as cst
from gtfs4sim import helpers as hlp
from gtfs4sim.network import Link
from gtfs4sim.scenario import Scenario
from gtfs4sim.schedule import TransitStopFacility

class DataPlausibilityWarning(UserWarning):
    """Implausible data was found and repaired or pruned. Not an error: the run continues."""


@dataclass
class CorrectionReport:
    """What a PlausibilityCorrector run changed or detected."""

    repaired_links: list = field(default_factory=list)  # (link_id, old length)
    implausible_stops: list = field(default_factory=list)
    removed_stops: list = field(default_factory=list)
    removed_lines: list = field(default_factory=list)
    dangling_references: list = field(default_factory=list)  # (line_id, route_id, stop_id)

    def is_empty(self) -> bool:
        """True if nothing was implausible or changed. Kept dangling references are not counted:
        they are found again by every run until their lines are removed."""
        return not (self.repaired_links or self.implausible_stops or self.removed_stops
                    or self.removed_lines)

    def summary(self) -> str:
        return (f"Repaired links: {len(self.repaired_links)} - Removed stops: {len(self.removed_stops)} - "
                f"Removed lines: {len(self.removed_lines)} - Dangling stop references: {len(self.dangling_references)}")

    def write(self, filepath: str) -> None:
        """Exports the correction report to a text file."""
        with open(filepath, 'w') as f:
            f.write("Plausibility Correction Summary:\n")
            f.write("===========================================\n\n")
            f.write(self.summary() + "\n\n")
            for link_id, length in self.repaired_links:
                f.write(f"Repaired link {link_id} (length was {length})\n")
            for stop_id in self.removed_stops:
                f.write(f"Removed stop {stop_id}\n")
            for line_id in self.removed_lines:
                f.write(f"Removed transit line {line_id}\n")
            for line_id, route_id, stop_id in self.dangling_references:
                f.write(f"Dangling reference to stop {stop_id} in line {line_id} / route {route_id}\n")


def has_implausible_length(link: Link) -> bool:
    return not (0 < link.length < float('inf'))

def has_implausible_coordinate(stop: TransitStopFacility) -> bool:
    x, y = stop.coord
    return not (hlp.is_finite(x) and hlp.is_finite(y))


class PlausibilityCorrector:
    """
    Corrects the network and the transit schedule of a scenario in place.

    Attributes:
        scenario (Scenario): The scenario to correct.
        fallback_link_length (float): The length written over implausible link lengths.
        remove_dangling_lines (bool): Whether lines with dangling stop references are removed too.
    """

    def __init__(self, scenario: Scenario, fallback_link_length: float = cst.FALLBACK_LINK_LENGTH, remove_dangling_lines: bool = False):
        self.scenario = scenario
        self.fallback_link_length = fallback_link_length
        self.remove_dangling_lines = remove_dangling_lines

    def run(self) -> CorrectionReport:
        """ Corrects the network, then the schedule
        """
        report = CorrectionReport()
        for sweep in (self._repair_links, self._prune_schedule):
            message = sweep(report)
            if message:
                warnings.warn(message, DataPlausibilityWarning, stacklevel=2)

        print(f"INFO \t Plausibility correction done. {report.summary()}")
        return report

    def correct_network(self, report: CorrectionReport = None) -> CorrectionReport:
        """ Sets the length of each link with an implausible length to the fallback length. No link is removed.
        """
        if report is None:
            report = CorrectionReport()
        message = self._repair_links(report)
        if message:
            warnings.warn(message, DataPlausibilityWarning, stacklevel=2)
        return report

    def correct_schedule(self, report: CorrectionReport = None) -> CorrectionReport:
        """
        Removes the stops with an implausible coordinate and every line serving one of them.

        All lines to remove are identified before any stop is removed, so that each removed stop
        takes all of its referencing lines with it. Dangling references are logged and recorded in
        the report; they only cause a warning when remove_dangling_lines removes their lines.
        """
        if report is None:
            report = CorrectionReport()
        message = self._prune_schedule(report)
        if message:
            warnings.warn(message, DataPlausibilityWarning, stacklevel=2)
        return report

    # Sweeps, returning the warning message (None when nothing was changed)

    def _repair_links(self, report: CorrectionReport):
        repaired = 0
        for link in self.scenario.network.links.values():
            if has_implausible_length(link):
                print(f"ALERT \t Link length is {link.length}. Adjust link length for link {link.id}")
                report.repaired_links.append((link.id, link.length))
                link.length = self.fallback_link_length
                repaired += 1

        if repaired:
            return f"{repaired} link(s) with an implausible length set to {self.fallback_link_length}"
        return None

    def _prune_schedule(self, report: CorrectionReport):
        schedule = self.scenario.transit_schedule

        wrong_stop_ids = []
        for stop in schedule.facilities.values():
            if has_implausible_coordinate(stop):
                print(f"ALERT \t Transit stop coordinate is {stop.coord}. Adding stop {stop.id} / {stop.name} to the list of wrong stops...")
                wrong_stop_ids.append(stop.id)
        report.implausible_stops.extend(wrong_stop_ids)

        # get lines for these stops
        wrong_stops = set(wrong_stop_ids)
        lines_with_wrong_stops = []
        dangling = []
        for line in schedule.transit_lines.values():
            for route in line.routes.values():
                for route_stop in route.stops:
                    stop_id = route_stop.stop_facility_id
                    if stop_id in wrong_stops:
                        lines_with_wrong_stops.append(line.id)
                    elif stop_id not in schedule.facilities:
                        dangling.append((line.id, route.id, stop_id))

        for line_id, route_id, stop_id in dangling:
            print(f"ALERT \t Transit route {line_id} / {route_id} refers to the unknown stop {stop_id}.")
        report.dangling_references.extend(dangling)

        lines_to_remove = lines_with_wrong_stops
        if self.remove_dangling_lines:
            lines_to_remove = lines_to_remove + [line_id for line_id, _, _ in dangling]

        # remove stops
        for stop_id in wrong_stop_ids:
            print(f"ALERT \t Removing stop Id {stop_id}")
            if schedule.remove_stop_facility(stop_id):
                report.removed_stops.append(stop_id)

        # remove lines, a line listed twice is only removed once
        removed_lines = []
        for line_id in lines_to_remove:
            if schedule.remove_transit_line(line_id):
                print(f"ALERT \t Removing transit line {line_id}")
                removed_lines.append(line_id)
        report.removed_lines.extend(removed_lines)

        if wrong_stop_ids or removed_lines:
            return (f"{len(wrong_stop_ids)} stop(s) with an implausible coordinate removed, "
                    f"{len(removed_lines)} transit line(s) removed")
        return None
