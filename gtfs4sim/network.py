# coding: utf-8

import pandas as pd

from gtfs4sim import constants as cst

class Node:
    """A network node located at a planar coordinate."""

    def __init__(self, node_id: str, coord: tuple):
        self.id = node_id
        self.coord = coord

    def __repr__(self):
        return f"Node(id={self.id!r}, coord={self.coord!r})"


class Link:
    """A directed network link between two nodes.

    The length is not validated: links synthesized from implausible stop
    coordinates carry a zero or non-finite length until the PlausibilityCorrector repairs them.
    """

    def __init__(self, link_id: str, from_node: Node, to_node: Node, length: float,
                 freespeed: float = cst.DEFAULT_FREESPEED, capacity: float = cst.PSEUDO_LINK_CAPACITY,
                 lanes: float = cst.PSEUDO_LINK_LANES, allowed_modes=None):
        """
        Initializes the Link class.

        Args:
            link_id (str): The id of the link.
            from_node (Node): The upstream node.
            to_node (Node): The downstream node.
            length (float): Length in the unit of the coordinate system.
            freespeed (float, optional): [Default: 50 km/h] Free speed in m/s.
            capacity (float, optional): Flow capacity in vehicles per hour.
            lanes (float, optional): Number of lanes.
            allowed_modes (set, optional): [Default: {"pt"}] Modes allowed on the link.
        """
        self.id = link_id
        self.from_node = from_node
        self.to_node = to_node
        self.length = length
        self.freespeed = freespeed
        self.capacity = capacity
        self.lanes = lanes
        self.allowed_modes = set(allowed_modes) if allowed_modes is not None else {cst.PT_MODE}

    @property
    def length(self) -> float:
        """float: The length of the link."""
        return self._length

    @length.setter
    def length(self, value: float):
        self._length = float(value)

    @property
    def capacity(self) -> float:
        """float: The flow capacity of the link in vehicles per hour."""
        return self._capacity

    @capacity.setter
    def capacity(self, value: float):
        if value < 0:
            raise ValueError("Capacity must be a non-negative value.")
        self._capacity = value

    def __repr__(self):
        return f"Link(id={self.id!r}, from={self.from_node.id!r}, to={self.to_node.id!r}, length={self.length!r})"


class Network:
    """A mutable container of nodes and links, keyed by id."""

    def __init__(self):
        self._nodes = {}
        self._links = {}

    @property
    def nodes(self) -> dict:
        """dict: The nodes of the network, keyed by node id."""
        return self._nodes

    @property
    def links(self) -> dict:
        """dict: The links of the network, keyed by link id."""
        return self._links

    def add_node(self, node: Node) -> Node:
        if node.id in self._nodes:
            raise ValueError(f"ERROR \t A node with id {node.id} already exists in the network.")
        self._nodes[node.id] = node
        return node

    def add_link(self, link: Link) -> Link:
        if link.id in self._links:
            raise ValueError(f"ERROR \t A link with id {link.id} already exists in the network.")
        for node in (link.from_node, link.to_node):
            if node.id not in self._nodes:
                raise ValueError(f"ERROR \t Link {link.id} refers to node {node.id} which is not part of the network.")
        self._links[link.id] = link
        return link

    def remove_link(self, link_id: str) -> bool:
        """Removes a link. Returns False if no link has this id."""
        return self._links.pop(link_id, None) is not None

    # Export

    def nodes_to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(
            [{'node_id': node.id, 'x': node.coord[0], 'y': node.coord[1]} for node in self._nodes.values()],
            columns=['node_id', 'x', 'y'])

    def links_to_dataframe(self) -> pd.DataFrame:
        rows = [{
            'link_id': link.id,
            'from_node': link.from_node.id,
            'to_node': link.to_node.id,
            'length': link.length,
            'freespeed': link.freespeed,
            'capacity': link.capacity,
            'lanes': link.lanes,
            'modes': ','.join(sorted(link.allowed_modes))
        } for link in self._links.values()]
        return pd.DataFrame(rows, columns=['link_id', 'from_node', 'to_node', 'length', 'freespeed', 'capacity', 'lanes', 'modes'])
