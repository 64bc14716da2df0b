# coding: utf-8

"""
A Python script illustrating the step by step usage of gtfs4sim, as an alternative to the
ScheduleBuilder pipeline (see gtfs4sim_cli.py).

This script demonstrates how to:
1. Load and check a GTFS feed.
2. Convert it into a transit schedule, a pseudo network and transit vehicles.
3. Correct the implausible data and export the results.

Ensure the following structure for the input data:
- GTFS zip archive (e.g., "input/GTFS_example.zip")
- Output directory for results (e.g., "output/")
"""

import sys
import os

# Adding the parent directory to the Python path for access to the gtfs4sim module
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

# Import relevant classes from the gtfs4sim package
from gtfs4sim.gtfsfeed import GTFSFeed
from gtfs4sim.scenario import Scenario
from gtfs4sim.converter import GtfsConverter
from gtfs4sim.pseudonetwork import PseudoNetworkCreator
from gtfs4sim.vehiclegen import VehiclesForScheduleCreator
from gtfs4sim.corrector import PlausibilityCorrector
from gtfs4sim.transformation import create_transformation

if __name__ == "__main__":
    #################################################################################
    ###################### STEP 1: Load and check the GTFS data ####################
    #################################################################################

    gtfs = GTFSFeed(gtfs_zip_file="input/GTFS_example.zip")
    gtfs.check_all()
    gtfs.show_general_info()

    # Services running on the reference date
    print(gtfs.active_service_ids("2019-12-11"))

    #################################################################################
    ######### STEP 2: Transit schedule, pseudo network and transit vehicles #########
    #################################################################################

    scenario = Scenario()

    converter = GtfsConverter(gtfs, scenario, transformation=create_transformation("EPSG:25832"), merge_stops=True)
    converter.date = "2019-12-11"
    converter.convert()

    PseudoNetworkCreator(scenario.transit_schedule, scenario.network, prefix="pt_").create_network()

    VehiclesForScheduleCreator(scenario.transit_schedule, scenario.transit_vehicles).run()
    for vehicle_type in scenario.transit_vehicles.vehicle_types.values():
        vehicle_type.pcu_equivalents = 0.0

    #################################################################################
    ################## STEP 3: Plausibility correction and export ###################
    #################################################################################

    report = PlausibilityCorrector(scenario).run()
    report.write("output/Correction_summary.txt")

    scenario.show_general_info()
    scenario.export_to_csv("output")
