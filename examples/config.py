# ------------------------------------------
# CONFIGURATION FILE: GTFS4SIM
# ------------------------------------------

# ========================================== #
# ============= BASIC PARAMETERS =========== #
# ========================================== #

# --- General ---
output_folder = "output"  # Output folder path (stores the output files)
scenario_name = "Example"  # Scenario label

# --- GTFS Data ---
gtfs_zip_file = "input/GTFS_example.zip"  # Path to the GTFS zip archive
reference_date = "2019-12-11"  # Only the services running on this date are converted (YYYY-MM-DD or YYYYMMDD)

# --- Coordinate system ---
target_crs = "EPSG:25832"  # Planar coordinate system of the simulation. GTFS coordinates are WGS84 (EPSG:4326)

# ========================================== #
# =========== ADVANCED PARAMETERS ========== #
# ========================================== #

# --- Conversion ---
merge_stops = False  # Merge the stops sharing the same name and location

# --- Pseudo network ---
link_id_prefix = "pt_"  # Prefix of the pseudo network node and link ids

# --- Plausibility correction ---
remove_dangling_lines = False  # Also remove the lines referring to stops missing from the schedule

# --- Outputs ---
export_csv = True  # Export the network, schedule and vehicles as CSV files
