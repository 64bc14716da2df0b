# coding: utf-8

import zipfile
from pathlib import Path, PurePosixPath

import numpy as np
import pandas as pd

from gtfs4sim import helpers as hlp

WEEKDAYS = ['monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday']

class ReadError(OSError):
    """Raised when a GTFS archive is missing or cannot be parsed."""


class GTFSFeed:
    """A class to represent a GTFS feed read from a zip archive.

    Holds the GTFS tables as pandas DataFrames. Only the columns needed to build a transit
    schedule are kept. Times in stop_times and frequencies are converted into seconds after
    midnight (GTFS times may exceed 24:00:00), calendar dates into pd.Timestamp.

    The feed is not validated beyond the presence of the required files and columns; values
    that cannot be parsed as numbers (e.g. stop coordinates) become NaN and are handled later
    by the PlausibilityCorrector.
    """

    REQUIRED_FILES = ['stops.txt', 'routes.txt', 'trips.txt', 'stop_times.txt']
    CALENDAR_FILES = ['calendar.txt', 'calendar_dates.txt']

    def __init__(self, gtfs_zip_file: str):
        print("=========================================")
        print(f"INFO \t Creation of a GTFSFeed object.")
        print("=========================================")

        self.gtfs_zip_file = gtfs_zip_file

        try:
            with zipfile.ZipFile(self.gtfs_zip_file) as archive:
                members = self._index_members(archive)

                missing = [f for f in self.REQUIRED_FILES if f not in members]
                if missing:
                    raise ReadError(f"ERROR \t Required GTFS file(s) missing from {self.gtfs_zip_file}: {missing}")
                if not any(f in members for f in self.CALENDAR_FILES):
                    raise ReadError(f"ERROR \t Neither calendar.txt nor calendar_dates.txt found in {self.gtfs_zip_file}")

                self._stops = self.load_stops(archive, members)
                self._routes = self.load_csv(archive, members, "routes.txt",
                                             columns=['route_id', 'route_type'],
                                             optional_columns=['agency_id', 'route_short_name', 'route_long_name'])
                self._trips = self.load_csv(archive, members, "trips.txt",
                                            columns=['route_id', 'service_id', 'trip_id'],
                                            optional_columns=['direction_id', 'shape_id', 'trip_headsign'])
                self._stop_times = self.load_stop_times(archive, members)
                self._calendar = self.load_calendar(archive, members)
                self._calendar_dates = self.load_calendar_dates(archive, members)
                self._frequencies = self.load_frequencies(archive, members)
                self._feed_info = self.load_csv(archive, members, "feed_info.txt", required=False,
                                                optional_columns=['feed_publisher_name', 'feed_start_date', 'feed_end_date', 'feed_version'])
        except zipfile.BadZipFile as e:
            raise ReadError(f"ERROR \t {self.gtfs_zip_file} is not a valid zip archive.") from e

        self._routes['route_type'] = pd.to_numeric(self._routes['route_type'], errors='coerce')

        start_date, end_date = self.feed_dates()
        if start_date is not None or end_date is not None:
            print(f"INFO \t Feed start date: {start_date}")
            print(f"INFO \t Feed end date: {end_date}")
        print(f"INFO \t Parsed trips: {len(self._trips)}")
        print(f"INFO \t Parsed routes: {len(self._routes)}")
        print(f"INFO \t Parsed stops: {len(self._stops)}")

        print("INFO \t Successful initialization of the GTFSFeed. The feed can now be converted into a transit schedule.")

    # Properties and Setters

    @property
    def gtfs_zip_file(self) -> Path:
        """Path: The path to the GTFS zip archive."""
        return self._gtfs_zip_file

    @gtfs_zip_file.setter
    def gtfs_zip_file(self, value):
        path = Path(value)
        if not path.is_file():
            raise ReadError(f"ERROR \t Unable to find the GTFS archive: {path}")
        self._gtfs_zip_file = path

    @property
    def stops(self) -> pd.DataFrame:
        """pd.DataFrame: The GTFS stops data, with numeric stop_lat and stop_lon."""
        return self._stops

    @property
    def routes(self) -> pd.DataFrame:
        """pd.DataFrame: The GTFS routes data."""
        return self._routes

    @property
    def trips(self) -> pd.DataFrame:
        """pd.DataFrame: The GTFS trips data."""
        return self._trips

    @property
    def stop_times(self) -> pd.DataFrame:
        """pd.DataFrame: The GTFS stop times, with arrival_s and departure_s columns in seconds."""
        return self._stop_times

    @property
    def calendar(self) -> pd.DataFrame:
        """pd.DataFrame: The GTFS calendar data (may be empty)."""
        return self._calendar

    @property
    def calendar_dates(self) -> pd.DataFrame:
        """pd.DataFrame: The GTFS calendar exceptions (may be empty)."""
        return self._calendar_dates

    @property
    def frequencies(self) -> pd.DataFrame:
        """pd.DataFrame: The GTFS frequencies, with start_s and end_s columns in seconds (may be empty)."""
        return self._frequencies

    @property
    def feed_info(self) -> pd.DataFrame:
        """pd.DataFrame: The GTFS feed info (may be empty)."""
        return self._feed_info

    # Services

    def active_service_ids(self, date) -> set:
        """
        Returns the ids of the services running on a given date.

        A service runs if its calendar.txt weekday flag is set and the date lies within
        [start_date, end_date], unless calendar_dates.txt removes it (exception_type 2).
        calendar_dates.txt may also add services for the date (exception_type 1).

        Args:
            date: A date as 'YYYY-MM-DD' or 'YYYYMMDD' string, datetime.date or pd.Timestamp.
        """
        day = hlp.parse_gtfs_date(date) if isinstance(date, str) else pd.Timestamp(date)
        day = day.normalize()

        active = set()
        if not self._calendar.empty:
            cal = self._calendar
            running = cal[cal[day.day_name().lower()] & (cal['start_date'] <= day) & (cal['end_date'] >= day)]
            active.update(running['service_id'])

        if not self._calendar_dates.empty:
            exceptions = self._calendar_dates[self._calendar_dates['date'] == day]
            active.update(exceptions.loc[exceptions['exception_type'] == 1, 'service_id'])
            active.difference_update(exceptions.loc[exceptions['exception_type'] == 2, 'service_id'])

        return active

    def feed_dates(self) -> tuple:
        """Returns the (start, end) dates of the first feed_info record, or (None, None)."""
        if self._feed_info.empty:
            return None, None
        info = self._feed_info.iloc[0]
        start = info.get('feed_start_date')
        end = info.get('feed_end_date')
        return (None if pd.isna(start) else start), (None if pd.isna(end) else end)

    # Data validation

    def check_stop_times(self):
        """ Checking that each stop time is associated with a known trip and a known stop
        """
        problem = False

        if not self._stop_times['stop_id'].isin(self._stops['stop_id']).all():
            problem = True
            print("ALERT \t Data consistency: some stop times are not associated with any stop.")

        if not self._stop_times['trip_id'].isin(self._trips['trip_id']).all():
            problem = True
            print("ALERT \t Data consistency: some stop times are not associated with any trip.")

        return problem

    def check_trips(self):
        """ Checking that each trip is associated with a known route and a known service
        """
        problem = False

        if not self._trips['route_id'].isin(self._routes['route_id']).all():
            problem = True
            print("ALERT \t Data consistency: some trips are not associated with any route.")

        services = set(self._calendar['service_id']) | set(self._calendar_dates['service_id'])
        if not self._trips['service_id'].isin(services).all():
            problem = True
            print("ALERT \t Data consistency: some trips are not associated with any service.")

        return problem

    def check_all(self):
        """ Checking the consistency of the data needed for the conversion
        """
        print("INFO \t Checking data consistency.")

        stop_times_status = self.check_stop_times()
        trips_status = self.check_trips()

        consistent = not stop_times_status and not trips_status
        if consistent:
            print("\t No problems found.")

        return consistent

    def show_general_info(self):
        """Displays general information about the GTFS feed."""
        print("INFO \t GTFS Feed Summary:")
        print(f"\t {'Trips:':<15} {self._trips.shape[0]:>8}  |  {'Routes:':<15} {self._routes.shape[0]:>8}  |  {'Services:':<15} {self._calendar.shape[0]:>8}")
        print(f"\t {'Stops:':<15} {self._stops.shape[0]:>8}  |  {'Stop Times:':<15} {self._stop_times.shape[0]:>8}  |  {'Frequencies:':<15} {self._frequencies.shape[0]:>8}")

    # Helper methods

    @staticmethod
    def _index_members(archive) -> dict:
        """Maps GTFS file names to archive members; files may sit at the root or in a sub folder."""
        members = {}
        for name in sorted(archive.namelist(), key=lambda n: n.count('/')):
            if name.endswith('/'):
                continue
            members.setdefault(PurePosixPath(name).name, name)
        return members

    def load_csv(self, archive, members, filename, columns=None, optional_columns=None, required=True):
        """
        Generic helper method to load a GTFS table from the archive as strings, keeping the
        required and optional columns. Missing optional files give an empty DataFrame.
        """
        columns = columns or []
        optional_columns = optional_columns or []
        wanted = columns + optional_columns

        if filename not in members:
            if required:
                raise ReadError(f"ERROR \t Required GTFS file '{filename}' is missing.")
            return pd.DataFrame(columns=wanted, dtype=str)

        try:
            with archive.open(members[filename]) as f:
                df = pd.read_csv(f, dtype=str, encoding='utf-8-sig', skipinitialspace=True)
        except (ValueError, UnicodeDecodeError) as e:
            raise ReadError(f"ERROR \t Problem loading {filename}.") from e

        df.columns = [c.strip() for c in df.columns]
        missing = [c for c in columns if c not in df.columns]
        if missing:
            raise ReadError(f"ERROR \t Required column(s) {missing} missing in {filename}.")

        for col in optional_columns:
            if col not in df.columns:
                df[col] = np.nan

        df = df[wanted].copy()
        for col in columns:
            if col.endswith('_id'):
                df[col] = df[col].str.strip()

        if columns and not hlp.check_dataframe(df[columns]):
            print(f"ALERT \t Empty values or NaN values found in {filename}. This might cause some issues.")

        return df

    def load_stops(self, archive, members):
        """Loads the stops, with numeric coordinates. Stations (location_type 1) are kept and flagged."""
        df = self.load_csv(archive, members, "stops.txt",
                           columns=['stop_id', 'stop_lat', 'stop_lon'],
                           optional_columns=['stop_name', 'location_type', 'parent_station'])
        df['stop_lat'] = pd.to_numeric(df['stop_lat'], errors='coerce')
        df['stop_lon'] = pd.to_numeric(df['stop_lon'], errors='coerce')
        df['location_type'] = pd.to_numeric(df['location_type'], errors='coerce').fillna(0).astype(int)
        df['stop_name'] = df['stop_name'].fillna('')
        return df

    def load_stop_times(self, archive, members):
        df = self.load_csv(archive, members, "stop_times.txt",
                           columns=['trip_id', 'arrival_time', 'departure_time', 'stop_id', 'stop_sequence'])
        try:
            df['stop_sequence'] = df['stop_sequence'].astype(int)
        except ValueError as e:
            raise ReadError("ERROR \t stop_sequence values of stop_times.txt must be integers.") from e
        df['arrival_s'] = df['arrival_time'].apply(hlp.timestr_to_seconds)
        df['departure_s'] = df['departure_time'].apply(hlp.timestr_to_seconds)
        return df.sort_values(['trip_id', 'stop_sequence'], kind='mergesort').reset_index(drop=True)

    def load_calendar(self, archive, members):
        df = self.load_csv(archive, members, "calendar.txt", required=False,
                           columns=['service_id'] + WEEKDAYS + ['start_date', 'end_date'])
        try:
            for day in WEEKDAYS:
                df[day] = df[day].astype(int).astype(bool)
            df['start_date'] = pd.to_datetime(df['start_date'], format='%Y%m%d')
            df['end_date'] = pd.to_datetime(df['end_date'], format='%Y%m%d')
        except ValueError as e:
            raise ReadError("ERROR \t Problem parsing calendar.txt.") from e
        return df

    def load_calendar_dates(self, archive, members):
        df = self.load_csv(archive, members, "calendar_dates.txt", required=False,
                           columns=['service_id', 'date', 'exception_type'])
        try:
            df['date'] = pd.to_datetime(df['date'], format='%Y%m%d')
            df['exception_type'] = df['exception_type'].astype(int)
        except ValueError as e:
            raise ReadError("ERROR \t Problem parsing calendar_dates.txt.") from e
        return df

    def load_frequencies(self, archive, members):
        df = self.load_csv(archive, members, "frequencies.txt", required=False,
                           columns=['trip_id', 'start_time', 'end_time', 'headway_secs'])
        try:
            df['headway_secs'] = df['headway_secs'].astype(int)
        except ValueError as e:
            raise ReadError("ERROR \t headway_secs values of frequencies.txt must be integers.") from e
        df['start_s'] = df['start_time'].apply(hlp.timestr_to_seconds)
        df['end_s'] = df['end_time'].apply(hlp.timestr_to_seconds)
        return df
