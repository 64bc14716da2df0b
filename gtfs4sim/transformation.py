# coding: utf-8

"""
Coordinate transformations from GTFS WGS84 coordinates to the planar coordinate
system of the simulation. A transformation is any callable taking (x, y) and
returning (x, y); GTFS longitudes are x and latitudes are y.
"""

import pyproj

from gtfs4sim import constants as cst

def create_transformation(target_crs: str = cst.CRS_DEFAULT_TARGET, source_crs: str = cst.CRS_WGS84):
    """ Returns a callable projecting (lon, lat) from source_crs to target_crs
    """
    return pyproj.Transformer.from_crs(source_crs, target_crs, always_xy=True).transform

def identity_transformation(x, y):
    """ Leaves coordinates untouched, e.g. for feeds already in a planar system
    """
    return x, y
