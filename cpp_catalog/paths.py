# cpp_catalog/paths.py
import os

# Base directory of the working tree the pipeline runs in
BASE_DIR = os.path.abspath(os.getcwd())

# JSON file holding the flattened catalog, overwritten every run
OUTPUT_FILE = os.environ.get(
    "CPP_OUTPUT_FILE", os.path.join(BASE_DIR, "cpp_majors.json")
)
