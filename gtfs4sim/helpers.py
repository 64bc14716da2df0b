# coding: utf-8

""" 
Some useful generic functions for gtfs4sim classes.
"""

import math

import numpy as np
import pandas as pd

def check_dataframe(df):
    """ Returns false if a dataframe contains NaN or empty values.
    """

    # Check for NaN values in the entire DataFrame
    if df.isna().any().any():
        return False
    # Check for empty cells in the entire DataFrame
    elif df.apply(lambda x: x == '').any().any():
        return False
    else:
        return True

def timestr_to_seconds(value):
    """ Converts a GTFS time string (HH:MM:SS, hours may exceed 23) into seconds after midnight.
    Returns NaN for missing or malformed values.
    """
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return np.nan
    try:
        hours, minutes, seconds = str(value).strip().split(":")
        return int(hours) * 3600 + int(minutes) * 60 + int(seconds)
    except ValueError:
        return np.nan

def seconds_to_timestr(seconds):
    """ Formats seconds after midnight as HH:MM:SS (hours may exceed 23)
    """
    seconds = int(round(seconds))
    return f"{seconds // 3600:02d}:{(seconds % 3600) // 60:02d}:{seconds % 60:02d}"

def parse_gtfs_date(value):
    """ Parses a GTFS date (YYYYMMDD) or an ISO date (YYYY-MM-DD) into a pd.Timestamp
    """
    text = str(value).strip()
    fmt = '%Y-%m-%d' if '-' in text else '%Y%m%d'
    try:
        return pd.to_datetime(text, format=fmt)
    except ValueError as e:
        raise ValueError(f"ERROR \t Unable to parse the date '{value}'.") from e

def is_finite(value) -> bool:
    """ True if the value lies strictly between -inf and +inf (NaN is not finite)
    """
    return -np.inf < value < np.inf

def euclidean_distance(coord_a, coord_b) -> float:
    """ Planar distance between two (x, y) coordinates
    """
    return math.hypot(coord_b[0] - coord_a[0], coord_b[1] - coord_a[1])
