# coding: utf-8

import sys

import pytest

from gtfs4sim import gtfs4sim_cli

CSV_FILES = ["network_nodes.csv", "network_links.csv", "transit_stops.csv", "transit_routes.csv",
             "transit_departures.csv", "vehicle_types.csv", "vehicles.csv"]


@pytest.fixture
def config_file(tmp_path, dirty_gtfs_zip):
    output_folder = tmp_path / "output"
    path = tmp_path / "my_config.py"
    path.write_text(
        f'output_folder = r"{output_folder}"\n'
        'scenario_name = "Test"\n'
        f'gtfs_zip_file = r"{dirty_gtfs_zip}"\n'
        'reference_date = "2019-12-11"\n'
        'target_crs = "EPSG:25832"\n'
        'link_id_prefix = "pt_"\n'
        'merge_stops = False\n'
        'remove_dangling_lines = False\n'
        'export_csv = True\n'
    )
    return path


class TestCLI:

    def test_load_config(self, config_file):
        config = gtfs4sim_cli.load_config(str(config_file))
        assert config.scenario_name == "Test"
        assert config.reference_date == "2019-12-11"

    def test_missing_config(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            gtfs4sim_cli.load_config(str(tmp_path / "nope.py"))

    def test_run_pipeline_exports_results(self, config_file, tmp_path):
        config = gtfs4sim_cli.load_config(str(config_file))

        with pytest.warns(UserWarning):
            scenario = gtfs4sim_cli.run_pipeline(config)

        output = tmp_path / "output"
        for filename in CSV_FILES:
            assert (output / filename).is_file()

        summary = (output / "Correction_summary.txt").read_text()
        assert "Removed stop S5" in summary
        assert "Removed transit line R3" in summary
        assert "R3" not in scenario.transit_schedule.transit_lines

    def test_main_writes_log(self, config_file, tmp_path, monkeypatch):
        monkeypatch.setattr(sys, "argv", ["gtfs4sim", str(config_file)])
        monkeypatch.setattr(sys, "stdout", sys.stdout)

        with pytest.warns(UserWarning):
            gtfs4sim_cli.main()

        log = (tmp_path / "output" / "output.log").read_text(encoding="utf-8")
        assert "Starting the run of the Test case study" in log
        assert "Run completed" in log
