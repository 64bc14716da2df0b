# coding: utf-8

import pandas as pd

class VehicleType:
    """A class to represent a transit vehicle type with configurable attributes."""

    def __init__(self, type_id: str, seats: int, standing_room: int = 0, length: float = 7.5, pcu_equivalents: float = 1.0):
        """
        Initializes the VehicleType class.

        Args:
            type_id (str): The id of the vehicle type.
            seats (int): Number of seats.
            standing_room (int, optional): [Default: 0] Number of standing places.
            length (float, optional): [Default: 7.5] Vehicle length in m.
            pcu_equivalents (float, optional): [Default: 1.0] Road capacity consumed, in passenger car units.
        """
        self.id = type_id
        self.seats = seats
        self.standing_room = standing_room
        self.length = length
        self.pcu_equivalents = pcu_equivalents

    # Properties and Setters
    @property
    def id(self) -> str:
        """str: The id of the vehicle type."""
        return self._id

    @id.setter
    def id(self, value: str):
        if not isinstance(value, str) or not value:
            raise ValueError("Vehicle type id must be a non-empty string.")
        self._id = value

    @property
    def seats(self) -> int:
        """int: The number of seats."""
        return self._seats

    @seats.setter
    def seats(self, value: int):
        if value < 0:
            raise ValueError("Number of seats must be a non-negative value.")
        self._seats = value

    @property
    def standing_room(self) -> int:
        """int: The number of standing places."""
        return self._standing_room

    @standing_room.setter
    def standing_room(self, value: int):
        if value < 0:
            raise ValueError("Standing room must be a non-negative value.")
        self._standing_room = value

    @property
    def length(self) -> float:
        """float: The length of the vehicle in m."""
        return self._length

    @length.setter
    def length(self, value: float):
        if value <= 0:
            raise ValueError("Vehicle length must be a positive value.")
        self._length = value

    @property
    def pcu_equivalents(self) -> float:
        """float: The passenger car units consumed by the vehicle (0 means no road capacity used)."""
        return self._pcu_equivalents

    @pcu_equivalents.setter
    def pcu_equivalents(self, value: float):
        if value < 0:
            raise ValueError("PCU equivalents must be a non-negative value.")
        self._pcu_equivalents = value

    @property
    def capacity(self) -> int:
        """int: Total passenger capacity (seats and standing room)."""
        return self.seats + self.standing_room


class Vehicle:
    """A transit vehicle instance of a given vehicle type."""

    def __init__(self, vehicle_id: str, type_id: str):
        self.id = vehicle_id
        self.type_id = type_id


class TransitVehicles:
    """A class to represent the fleet of transit vehicles together with their types."""

    def __init__(self):
        self._vehicles = {}
        self._vehicle_types = {}

    @property
    def vehicles(self) -> dict:
        """dict: The vehicles, keyed by vehicle id."""
        return self._vehicles

    @property
    def vehicle_types(self) -> dict:
        """dict: The vehicle types, keyed by type id."""
        return self._vehicle_types

    def add_vehicle_type(self, vehicle_type: VehicleType) -> VehicleType:
        if vehicle_type.id in self._vehicle_types:
            raise ValueError(f"ERROR \t Vehicle type {vehicle_type.id} already exists.")
        self._vehicle_types[vehicle_type.id] = vehicle_type
        return vehicle_type

    def add_vehicle(self, vehicle: Vehicle) -> Vehicle:
        if vehicle.id in self._vehicles:
            raise ValueError(f"ERROR \t Vehicle {vehicle.id} already exists.")
        if vehicle.type_id not in self._vehicle_types:
            raise ValueError(f"ERROR \t Vehicle {vehicle.id} refers to the unknown vehicle type {vehicle.type_id}.")
        self._vehicles[vehicle.id] = vehicle
        return vehicle

    # Fleet metrics
    def total_capacity(self) -> int:
        """Calculates the passenger capacity of the whole fleet.

        Returns:
            int: The sum of the capacities of all vehicles.
        """
        return sum(self._vehicle_types[vehicle.type_id].capacity for vehicle in self._vehicles.values())

    # Export

    def vehicle_types_to_dataframe(self) -> pd.DataFrame:
        rows = [{'type_id': t.id, 'seats': t.seats, 'standing_room': t.standing_room, 'length': t.length,
                 'pcu_equivalents': t.pcu_equivalents} for t in self._vehicle_types.values()]
        return pd.DataFrame(rows, columns=['type_id', 'seats', 'standing_room', 'length', 'pcu_equivalents'])

    def vehicles_to_dataframe(self) -> pd.DataFrame:
        rows = [{'vehicle_id': v.id, 'type_id': v.type_id} for v in self._vehicles.values()]
        return pd.DataFrame(rows, columns=['vehicle_id', 'type_id'])
