# coding: utf-8

import numpy as np
import pandas as pd
import pytest

from gtfs4sim import helpers as hlp
from gtfs4sim.transformation import create_transformation, identity_transformation


class TestTimes:

    def test_timestr_to_seconds(self):
        assert hlp.timestr_to_seconds("06:30:00") == 23400
        assert hlp.timestr_to_seconds("00:00:00") == 0
        # trips running after midnight
        assert hlp.timestr_to_seconds("25:15:00") == 90900
        assert hlp.timestr_to_seconds(" 7:05:09") == 25509

    def test_missing_or_malformed_times(self):
        assert np.isnan(hlp.timestr_to_seconds(np.nan))
        assert np.isnan(hlp.timestr_to_seconds(None))
        assert np.isnan(hlp.timestr_to_seconds("invalid"))
        assert np.isnan(hlp.timestr_to_seconds("12:00"))

    def test_seconds_to_timestr(self):
        assert hlp.seconds_to_timestr(23400) == "06:30:00"
        assert hlp.seconds_to_timestr(90900.0) == "25:15:00"


class TestDates:

    def test_formats(self):
        assert hlp.parse_gtfs_date("2019-12-11") == pd.Timestamp(2019, 12, 11)
        assert hlp.parse_gtfs_date("20191211") == pd.Timestamp(2019, 12, 11)

    def test_invalid(self):
        with pytest.raises(ValueError, match="Unable to parse the date"):
            hlp.parse_gtfs_date("yesterday")


class TestGeometry:

    def test_is_finite(self):
        assert hlp.is_finite(0.0)
        assert hlp.is_finite(-1e300)
        assert not hlp.is_finite(float('nan'))
        assert not hlp.is_finite(float('inf'))
        assert not hlp.is_finite(-float('inf'))

    def test_euclidean_distance(self):
        assert hlp.euclidean_distance((0.0, 0.0), (3.0, 4.0)) == 5.0
        assert np.isnan(hlp.euclidean_distance((float('nan'), 7.0), (0.0, 0.0)))

    def test_check_dataframe(self):
        assert hlp.check_dataframe(pd.DataFrame({"a": ["x", "y"]}))
        assert not hlp.check_dataframe(pd.DataFrame({"a": ["x", ""]}))
        assert not hlp.check_dataframe(pd.DataFrame({"a": ["x", None]}))


class TestTransformation:

    def test_identity(self):
        assert identity_transformation(8.0, 47.0) == (8.0, 47.0)

    def test_utm_projection(self):
        x, y = create_transformation("EPSG:25832")(9.0, 0.0)
        # central meridian of UTM zone 32 at the equator
        assert x == pytest.approx(500000, abs=1e-3)
        assert y == pytest.approx(0, abs=1e-3)
