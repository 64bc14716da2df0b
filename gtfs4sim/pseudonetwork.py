# coding: utf-8

from gtfs4sim import constants as cst
from gtfs4sim import helpers as hlp
from gtfs4sim.network import Link, Network, Node
from gtfs4sim.schedule import TransitSchedule

class PseudoNetworkCreator:
    """
    Creates a pseudo network carrying the transit routes of a schedule.

    Every stop facility served by a route gets a node at its coordinate, every distinct pair of
    consecutive stops gets one straight link. Links are shared by all routes serving the same
    stop pair. Link ids are prefixed to avoid collisions with an existing road network.
    """

    def __init__(self, schedule: TransitSchedule, network: Network, prefix: str = cst.LINK_ID_PREFIX):
        """
        Args:
            schedule (TransitSchedule): The schedule whose routes are to be carried.
            network (Network): The network to which nodes and links are added.
            prefix (str, optional): [Default: "pt_"] Prefix of the node and link ids.
        """
        self.schedule = schedule
        self.network = network
        self.prefix = prefix

        self._pair_links = {}
        self._max_speeds = {}
        self._link_counter = 0

    def create_network(self):
        """ Adds the nodes and links of the pseudo network and assigns the network route of each transit route
        """
        print(f"INFO \t Creating a pseudo network (id prefix '{self.prefix}')...")

        missing_stops = set()
        for _, route in self.schedule.iter_routes():
            route.link_ids = []
            for previous, current in zip(route.stops[:-1], route.stops[1:]):
                from_facility = self.schedule.facilities.get(previous.stop_facility_id)
                to_facility = self.schedule.facilities.get(current.stop_facility_id)
                if from_facility is None:
                    missing_stops.add(previous.stop_facility_id)
                if to_facility is None:
                    missing_stops.add(current.stop_facility_id)
                if from_facility is None or to_facility is None:
                    continue

                link = self._get_or_create_link(from_facility, to_facility)
                route.link_ids.append(link.id)

                travel_time = current.arrival_offset - previous.departure_offset
                if travel_time > 0:
                    speed = link.length / travel_time
                    self._max_speeds[link.id] = max(self._max_speeds.get(link.id, 0.0), speed)

        for link_id, speed in self._max_speeds.items():
            if hlp.is_finite(speed) and speed > 0:
                self.network.links[link_id].freespeed = speed

        self._assign_stop_links()

        if missing_stops:
            print(f"ALERT \t {len(missing_stops)} stop(s) referenced by transit routes are not in the schedule. No links created for them.")
        print(f"INFO \t Pseudo network created: {len(self.network.nodes)} nodes - {len(self.network.links)} links.")

    # Helper methods

    def _get_node(self, facility) -> Node:
        node_id = f"{self.prefix}{facility.id}"
        node = self.network.nodes.get(node_id)
        if node is None:
            node = self.network.add_node(Node(node_id, facility.coord))
        return node

    def _get_or_create_link(self, from_facility, to_facility) -> Link:
        key = (from_facility.id, to_facility.id)
        link = self._pair_links.get(key)
        if link is None:
            from_node = self._get_node(from_facility)
            to_node = self._get_node(to_facility)
            length = hlp.euclidean_distance(from_node.coord, to_node.coord)
            link = self.network.add_link(Link(f"{self.prefix}{self._link_counter}", from_node, to_node, length))
            self._link_counter += 1
            self._pair_links[key] = link
        return link

    def _assign_stop_links(self):
        """Each served facility gets the first link arriving at it, or leaving it for stops that are only ever first."""
        outgoing = {}
        for (from_id, to_id), link in self._pair_links.items():
            facility = self.schedule.facilities[to_id]
            if facility.link_id is None:
                facility.link_id = link.id
            outgoing.setdefault(from_id, link.id)

        for from_id, link_id in outgoing.items():
            facility = self.schedule.facilities[from_id]
            if facility.link_id is None:
                facility.link_id = link_id


def create_pseudo_network(schedule: TransitSchedule, network: Network, link_id_prefix: str = cst.LINK_ID_PREFIX):
    """ Default network synthesis: a pseudo network with one link per consecutive stop pair
    """
    PseudoNetworkCreator(schedule, network, link_id_prefix).create_network()
