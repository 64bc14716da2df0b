# coding: utf-8

from pathlib import Path

from gtfs4sim.network import Network
from gtfs4sim.schedule import TransitSchedule
from gtfs4sim.vehicles import TransitVehicles

class Scenario:
    """Aggregate root holding the network, the transit schedule and the transit vehicles of one run."""

    def __init__(self, network: Network = None, transit_schedule: TransitSchedule = None, transit_vehicles: TransitVehicles = None):
        self.network = network if network is not None else Network()
        self.transit_schedule = transit_schedule if transit_schedule is not None else TransitSchedule()
        self.transit_vehicles = transit_vehicles if transit_vehicles is not None else TransitVehicles()

    def show_general_info(self):
        """Displays the size of the scenario."""
        schedule = self.transit_schedule
        n_routes = sum(1 for _ in schedule.iter_routes())

        print("INFO \t Scenario Summary:")
        print(f"\t {'Stops:':<15} {len(schedule.facilities):>8}  |  {'Lines:':<15} {len(schedule.transit_lines):>8}  |  {'Routes:':<15} {n_routes:>8}")
        print(f"\t {'Departures:':<15} {schedule.n_departures():>8}  |  {'Nodes:':<15} {len(self.network.nodes):>8}  |  {'Links:':<15} {len(self.network.links):>8}")
        print(f"\t {'Vehicles:':<15} {len(self.transit_vehicles.vehicles):>8}  |  {'Vehicle types:':<15} {len(self.transit_vehicles.vehicle_types):>8}")

    def export_to_csv(self, output_folder: str):
        """
        Export the scenario into CSV files.

        Args:
            output_folder (str): Path to the folder where CSVs will be saved.
        """
        output_path = Path(output_folder)
        output_path.mkdir(parents=True, exist_ok=True)

        print("INFO \t Exporting scenario data to CSV...")

        export_map = {
            "network_nodes.csv": self.network.nodes_to_dataframe(),
            "network_links.csv": self.network.links_to_dataframe(),
            "transit_stops.csv": self.transit_schedule.stops_to_dataframe(),
            "transit_routes.csv": self.transit_schedule.routes_to_dataframe(),
            "transit_departures.csv": self.transit_schedule.departures_to_dataframe(),
            "vehicle_types.csv": self.transit_vehicles.vehicle_types_to_dataframe(),
            "vehicles.csv": self.transit_vehicles.vehicles_to_dataframe()
        }

        for filename, df in export_map.items():
            df.to_csv(output_path / filename, index=False)
            print(f"\t - Exported: {filename}")
