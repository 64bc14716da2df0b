# coding: utf-8

import sys
import os
import importlib.util
import time
from pathlib import Path

# Import relevant classes from the gtfs4sim package
from gtfs4sim import constants as cst
from gtfs4sim.schedulebuilder import ScheduleBuilder
from gtfs4sim.transformation import create_transformation

# Std redirection

class Tee:
    """A class to duplicate stdout to both a file and the terminal."""
    def __init__(self, filename):
        self.terminal = sys.stdout  # Keep reference to original stdout
        self.log = open(filename, mode="w", encoding="utf-8")

    def write(self, message):
        self.terminal.write(message)  # Print to terminal
        self.log.write(message)  # Save to file

    def flush(self):
        self.terminal.flush()
        self.log.flush()

    def close(self):
        self.log.close()

# Main

def main():
    # Welcome message
    print("------------------------------------------------")
    print("         Welcome to the gtfs4sim tool!")
    print("------------------------------------------------")

    print("------------------------------------------------")
    print("Make sure to configure your case study in the config file.")
    print("Let's turn your GTFS feed into a simulation-ready transit scenario!")
    print("------------------------------------------------")

    print("")

    if len(sys.argv) > 1:
        config_path = sys.argv[1]
    else:
        config_path = input("Enter the path to the python configuration file: ")  # e.g., '/path/to/config.py'

    # Dynamically load the config
    config = load_config(config_path)

    output_folder = getattr(config, "output_folder", cst.OUTPUT_FOLDER)
    Path(output_folder).mkdir(parents=True, exist_ok=True)

    tee = Tee(f"{output_folder}/output.log")
    sys.stdout = tee  # Capture all prints in a log file

    try:
        # Run the pipeline using the loaded config module
        run_pipeline(config)
    finally:
        sys.stdout = sys.__stdout__  # Reset stdout after script ends
        tee.close()

# Run the pipeline

def run_pipeline(config):
    output_folder = getattr(config, "output_folder", cst.OUTPUT_FOLDER)

    print("")
    print("------------------------------------------------")
    print(f"Starting the run of the {config.scenario_name} case study")
    print(f"Results are stored in the following folder: {output_folder}")
    print("------------------------------------------------")
    print("")

    # Start time

    start_time = time.time()

    #################################################################################
    ########## STEP 1: Build the transit schedule, network and vehicles ############
    #################################################################################

    builder = ScheduleBuilder(
        date=getattr(config, "reference_date", cst.DEFAULT_REFERENCE_DATE),
        link_id_prefix=getattr(config, "link_id_prefix", cst.LINK_ID_PREFIX),
        merge_stops=getattr(config, "merge_stops", False),
        remove_dangling_lines=getattr(config, "remove_dangling_lines", False)
    )

    transformation = create_transformation(target_crs=getattr(config, "target_crs", cst.CRS_DEFAULT_TARGET))
    scenario = builder.run(config.gtfs_zip_file, transformation)

    #################################################################################
    ############################ STEP 2: Export results #############################
    #################################################################################

    if getattr(config, "export_csv", True):
        scenario.export_to_csv(output_folder)

    builder.report.write(f"{output_folder}/Correction_summary.txt")
    print(f"INFO \t Correction summary saved to {output_folder}/Correction_summary.txt")

    # End time and message

    end_time = time.time()

    # Calculate the duration
    duration = end_time - start_time
    minutes = int(duration // 60)  # Get the whole minutes
    seconds = duration % 60         # Get the remaining seconds

    print("")
    print("")
    print("------------------------------------------------")
    print(f"Run completed")
    print(f"Elapsed time: {minutes} minutes and {seconds:.2f} seconds")
    print("------------------------------------------------")

    return scenario

# Helper functions

def load_config(config_path):
    # Ensure the provided config file exists
    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Config file not found: {config_path}")

    # Get the module name (e.g., 'config') from the file name (e.g., 'config.py')
    config_name = os.path.splitext(os.path.basename(config_path))[0]

    # Dynamically load the config module
    spec = importlib.util.spec_from_file_location(config_name, config_path)
    config_module = importlib.util.module_from_spec(spec)
    sys.modules[config_name] = config_module
    spec.loader.exec_module(config_module)

    return config_module

if __name__ == "__main__":
    main()  # Run your main function
