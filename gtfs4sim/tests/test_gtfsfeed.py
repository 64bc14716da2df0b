# coding: utf-8

import numpy as np
import pandas as pd
import pytest

from gtfs4sim.gtfsfeed import GTFSFeed, ReadError


class TestGTFSFeedLoading:

    def test_tables_are_loaded(self, gtfs_zip, capsys):
        feed = GTFSFeed(gtfs_zip)

        assert len(feed.stops) == 5
        assert len(feed.routes) == 2
        assert len(feed.trips) == 5
        assert len(feed.stop_times) == 13
        assert len(feed.frequencies) == 1

        out = capsys.readouterr().out
        assert "Parsed trips: 5" in out
        assert "Parsed routes: 2" in out
        assert "Parsed stops: 5" in out
        assert "Feed start date: 20190101" in out
        assert "Feed end date: 20191231" in out

    def test_times_are_converted_to_seconds(self, gtfs_zip):
        feed = GTFSFeed(gtfs_zip)

        t1 = feed.stop_times[feed.stop_times['trip_id'] == "T1"]
        assert list(t1['arrival_s']) == [8 * 3600, 8 * 3600 + 300, 8 * 3600 + 600]
        assert list(t1['departure_s']) == [8 * 3600, 8 * 3600 + 360, 8 * 3600 + 600]

        # blank intermediate times are kept as NaN
        t3 = feed.stop_times[feed.stop_times['trip_id'] == "T3"]
        assert np.isnan(t3['arrival_s'].iloc[1])

        assert feed.frequencies['start_s'].iloc[0] == 6 * 3600
        assert feed.frequencies['end_s'].iloc[0] == 7 * 3600

    def test_missing_coordinates_become_nan(self, make_gtfs_zip):
        stops = "stop_id,stop_name,stop_lat,stop_lon\nS1,Alpha,47.0,8.0\nS2,Beta,abc,\nS3,Gamma,47.02,8.02\n"
        feed = GTFSFeed(make_gtfs_zip({"stops.txt": stops}))

        s2 = feed.stops.set_index('stop_id').loc["S2"]
        assert np.isnan(s2['stop_lat'])
        assert np.isnan(s2['stop_lon'])
        # location_type defaults to 0 when the column is absent
        assert (feed.stops['location_type'] == 0).all()

    def test_files_in_sub_folder(self, make_gtfs_zip):
        feed = GTFSFeed(make_gtfs_zip(folder="my_feed/"))
        assert len(feed.trips) == 5

    def test_optional_files_may_be_absent(self, make_gtfs_zip):
        feed = GTFSFeed(make_gtfs_zip(drop=("frequencies.txt", "feed_info.txt", "calendar_dates.txt")))

        assert feed.frequencies.empty
        assert feed.calendar_dates.empty
        assert feed.feed_dates() == (None, None)


class TestGTFSFeedReadErrors:

    def test_missing_archive(self, tmp_path):
        with pytest.raises(ReadError, match="Unable to find"):
            GTFSFeed(tmp_path / "does_not_exist.zip")

    def test_corrupt_archive(self, tmp_path):
        path = tmp_path / "corrupt.zip"
        path.write_text("this is not a zip archive")

        with pytest.raises(ReadError, match="not a valid zip"):
            GTFSFeed(path)

    def test_missing_required_file(self, make_gtfs_zip):
        with pytest.raises(ReadError, match="stop_times.txt"):
            GTFSFeed(make_gtfs_zip(drop=("stop_times.txt",)))

    def test_missing_calendar_files(self, make_gtfs_zip):
        with pytest.raises(ReadError, match="calendar"):
            GTFSFeed(make_gtfs_zip(drop=("calendar.txt", "calendar_dates.txt")))

    def test_missing_required_column(self, make_gtfs_zip):
        routes = "route_id,route_short_name\nR1,1\n"
        with pytest.raises(ReadError, match="route_type"):
            GTFSFeed(make_gtfs_zip({"routes.txt": routes}))

    def test_unparseable_stop_sequence(self, make_gtfs_zip):
        stop_times = "trip_id,arrival_time,departure_time,stop_id,stop_sequence\nT1,08:00:00,08:00:00,S1,first\n"
        with pytest.raises(ReadError, match="stop_sequence"):
            GTFSFeed(make_gtfs_zip({"stop_times.txt": stop_times}))

    def test_read_error_is_an_os_error(self):
        assert issubclass(ReadError, OSError)


class TestActiveServices:

    @pytest.fixture
    def feed(self, gtfs_zip):
        return GTFSFeed(gtfs_zip)

    def test_weekday(self, feed):
        assert feed.active_service_ids("2019-12-11") == {"WD"}

    def test_gtfs_date_format(self, feed):
        assert feed.active_service_ids("20191211") == {"WD"}

    def test_weekend(self, feed):
        assert feed.active_service_ids("2019-12-14") == {"WE"}

    def test_removed_by_exception(self, feed):
        assert feed.active_service_ids("2019-12-25") == set()

    def test_added_by_exception(self, feed):
        assert feed.active_service_ids("2019-12-12") == {"WD", "WE"}

    def test_outside_date_range(self, feed):
        assert feed.active_service_ids("2020-01-01") == set()

    def test_timestamp(self, feed):
        assert feed.active_service_ids(pd.Timestamp("2019-12-11 14:30")) == {"WD"}

    def test_only_calendar_dates(self, make_gtfs_zip):
        feed = GTFSFeed(make_gtfs_zip(drop=("calendar.txt",)))
        assert feed.active_service_ids("2019-12-12") == {"WE"}
        assert feed.active_service_ids("2019-12-11") == set()


class TestDataConsistency:

    def test_consistent_feed(self, gtfs_zip, capsys):
        feed = GTFSFeed(gtfs_zip)
        assert feed.check_all()
        assert "No problems found." in capsys.readouterr().out

    def test_unknown_stop_in_stop_times(self, make_gtfs_zip, capsys):
        stop_times = "trip_id,arrival_time,departure_time,stop_id,stop_sequence\nT1,08:00:00,08:00:00,S1,1\nT1,08:05:00,08:05:00,SX,2\n"
        feed = GTFSFeed(make_gtfs_zip({"stop_times.txt": stop_times}))

        assert not feed.check_all()
        assert "some stop times are not associated with any stop" in capsys.readouterr().out

    def test_unknown_service_in_trips(self, make_gtfs_zip, capsys):
        feed = GTFSFeed(make_gtfs_zip({"trips.txt": "route_id,service_id,trip_id\nR1,NOPE,T1\n"}))

        assert not feed.check_all()
        assert "some trips are not associated with any service" in capsys.readouterr().out
