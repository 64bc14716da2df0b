# coding: utf-8

from gtfs4sim import constants as cst
from gtfs4sim.schedule import TransitSchedule
from gtfs4sim.vehicles import TransitVehicles, Vehicle, VehicleType

class VehiclesForScheduleCreator:
    """
    Creates the transit vehicles serving a schedule: one vehicle type per transport mode used by
    the routes and one vehicle per departure. Each departure is assigned its vehicle.

    Attributes:
        schedule (TransitSchedule): The schedule to serve.
        vehicles (TransitVehicles): The container receiving the vehicle types and vehicles.
    """

    def __init__(self, schedule: TransitSchedule, vehicles: TransitVehicles):
        self.schedule = schedule
        self.vehicles = vehicles

    @staticmethod
    def vehicle_type_id(mode: str) -> str:
        return f"{mode}_vehicle_type"

    def run(self):
        print("INFO \t Creating transit vehicles for the schedule...")

        routes = [route for _, route in self.schedule.iter_routes()]

        for mode in sorted({route.transport_mode for route in routes}):
            type_id = self.vehicle_type_id(mode)
            if type_id in self.vehicles.vehicle_types:
                continue
            spec = cst.VEHICLE_TYPE_SPECS.get(mode, cst.DEFAULT_VEHICLE_TYPE_SPEC)
            self.vehicles.add_vehicle_type(VehicleType(type_id, **spec))

        counter = len(self.vehicles.vehicles)
        for route in routes:
            type_id = self.vehicle_type_id(route.transport_mode)
            for departure in route.departures.values():
                vehicle = self.vehicles.add_vehicle(Vehicle(f"tr_{counter}", type_id))
                departure.vehicle_id = vehicle.id
                counter += 1

        print(f"INFO \t Created {len(self.vehicles.vehicles)} vehicles of {len(self.vehicles.vehicle_types)} vehicle type(s).")


def create_vehicles_for_schedule(schedule: TransitSchedule, vehicles: TransitVehicles):
    """ Default vehicle generation: one vehicle per departure, one vehicle type per transport mode
    """
    VehiclesForScheduleCreator(schedule, vehicles).run()
