# coding: utf-8

"""
ScheduleBuilder.
Runs the whole preparation of the transit data of a scenario from a GTFS archive:

    load feed -> convert to schedule -> synthesize network -> generate vehicles
    -> set the PCU of the vehicle types to 0 -> correct network -> correct schedule

The three generation steps are injected as callables so that any implementation
honouring the protocols below can replace the default ones.
"""

from typing import Callable, Protocol

from gtfs4sim import constants as cst
from gtfs4sim import helpers as hlp
from gtfs4sim.converter import convert_feed
from gtfs4sim.corrector import PlausibilityCorrector
from gtfs4sim.gtfsfeed import GTFSFeed
from gtfs4sim.network import Network
from gtfs4sim.pseudonetwork import create_pseudo_network
from gtfs4sim.scenario import Scenario
from gtfs4sim.schedule import TransitSchedule
from gtfs4sim.transformation import create_transformation
from gtfs4sim.vehicles import TransitVehicles
from gtfs4sim.vehiclegen import create_vehicles_for_schedule

# Capability interfaces

class ScheduleConverter(Protocol):
    def __call__(self, feed: GTFSFeed, scenario: Scenario, date, transformation: Callable, merge_stops: bool) -> None: ...

class NetworkSynthesizer(Protocol):
    def __call__(self, schedule: TransitSchedule, network: Network, link_id_prefix: str) -> None: ...

class VehicleGenerator(Protocol):
    def __call__(self, schedule: TransitSchedule, vehicles: TransitVehicles) -> None: ...


class ScheduleBuilder:
    """
    A class to build the transit schedule, pseudo network and vehicles of a scenario from a GTFS feed.

    Attributes:
        date (str): The reference date selecting the active services.
        link_id_prefix (str): Prefix of the pseudo network ids.
        merge_stops (bool): Whether stops with the same name and location are merged.
        remove_dangling_lines (bool): Whether lines referencing unknown stops are removed on correction.
        report (CorrectionReport): The correction report of the last run (None before the first run).
    """

    def __init__(self, date: str = cst.DEFAULT_REFERENCE_DATE, link_id_prefix: str = cst.LINK_ID_PREFIX,
                 merge_stops: bool = False, remove_dangling_lines: bool = False,
                 schedule_converter: ScheduleConverter = convert_feed,
                 network_synthesizer: NetworkSynthesizer = create_pseudo_network,
                 vehicle_generator: VehicleGenerator = create_vehicles_for_schedule):
        """
        Initializes the ScheduleBuilder.

        Args:
            date (str, optional): [Default: "2019-12-11"] Reference date, 'YYYY-MM-DD' or 'YYYYMMDD'.
            link_id_prefix (str, optional): [Default: "pt_"] Prefix of the pseudo network ids.
            merge_stops (bool, optional): [Default: False] Merge stops with the same name and location.
            remove_dangling_lines (bool, optional): [Default: False] Also remove the lines referencing unknown stops.
            schedule_converter (ScheduleConverter, optional): Replaces the default GTFS conversion.
            network_synthesizer (NetworkSynthesizer, optional): Replaces the default pseudo network creation.
            vehicle_generator (VehicleGenerator, optional): Replaces the default vehicle generation.
        """
        print("=========================================")
        print(f"INFO \t Creation of a ScheduleBuilder object.")
        print("=========================================")

        self.date = date
        self.link_id_prefix = link_id_prefix
        self.merge_stops = merge_stops
        self.remove_dangling_lines = remove_dangling_lines

        self.schedule_converter = schedule_converter
        self.network_synthesizer = network_synthesizer
        self.vehicle_generator = vehicle_generator

        self.report = None

        print("INFO \t Successful initialization of the ScheduleBuilder.")

    # Properties and Setters

    @property
    def date(self) -> str:
        """str: The reference date selecting the active services."""
        return self._date

    @date.setter
    def date(self, value: str):
        hlp.parse_gtfs_date(value)  # raises ValueError if unparseable
        self._date = value

    # Pipeline

    def run(self, gtfs_zip_file: str, transformation: Callable = None) -> Scenario:
        """
        Builds a new scenario from a GTFS archive.

        Args:
            gtfs_zip_file (str): Path to the GTFS zip archive.
            transformation (callable, optional): Maps (lon, lat) onto planar (x, y).
                [Default: WGS84 to EPSG:25832]

        Returns:
            Scenario: The scenario holding the corrected network, schedule and vehicles.
        """
        if transformation is None:
            transformation = create_transformation()

        scenario = Scenario()

        print("INFO \t STEP 1: Loading the GTFS feed")
        feed = GTFSFeed(gtfs_zip_file)
        feed.check_all()

        print("INFO \t STEP 2: Converting the GTFS feed into a transit schedule")
        self.schedule_converter(feed, scenario, self.date, transformation, self.merge_stops)

        print("INFO \t STEP 3: Creating the pseudo network")
        self.network_synthesizer(scenario.transit_schedule, scenario.network, self.link_id_prefix)

        print("INFO \t STEP 4: Creating the transit vehicles")
        self.vehicle_generator(scenario.transit_schedule, scenario.transit_vehicles)
        for vehicle_type in scenario.transit_vehicles.vehicle_types.values():
            vehicle_type.pcu_equivalents = 0.0

        print("INFO \t STEP 5: Plausibility correction")
        self.report = PlausibilityCorrector(scenario, remove_dangling_lines=self.remove_dangling_lines).run()

        scenario.show_general_info()

        return scenario
