"""
Program catalog pipeline entry point.

Runs one full pass: scrapes the bachelor program listing, cleans and
dedups major names, enriches every major with a description, writes the
JSON file, and upserts the records into PostgreSQL.
"""

import logging

# Import sys for stderr reporting and the process exit status
import sys

from .enrich import enrich_catalog
from .errors import ExtractionError, PersistenceError
from .load_data import save_data, upsert_records
from .paths import OUTPUT_FILE
from .query_data import get_row_counts
from .scrape.browser import open_browser
from .scrape.clean import clean_catalog
from .scrape.scrape import PROGRAMS_URL, extract_catalog


def run_pipeline(output_path=None):
    """Scrape, clean, enrich and persist the catalog.

    The browser is closed before anything is persisted. Nothing is written
    if the listing cannot be extracted.

    :param output_path: Where to write the JSON file; defaults to
        :data:`cpp_catalog.paths.OUTPUT_FILE`.
    :type output_path: str or None
    :returns: The records that were persisted.
    :rtype: list[cpp_catalog.enrich.MajorRecord]
    :raises ExtractionError: If the program listing is unavailable.
    :raises PersistenceError: If the database write fails.
    """
    output_path = output_path or OUTPUT_FILE
    print(f"Scraping program catalog from {PROGRAMS_URL}")

    with open_browser() as session:
        colleges = extract_catalog(session)
        cleaned = clean_catalog(colleges)
        records = enrich_catalog(session, cleaned)

    save_data(records, output_path)

    print("Saving data to database...")
    upsert_records(records)

    counts = get_row_counts()
    print(
        f"Database updated! {len(records)} records written "
        f"({counts['colleges']} colleges, {counts['departments']} departments, "
        f"{counts['majors']} majors in store)"
    )
    return records


def main():
    """Run the pipeline and translate fatal errors into an exit status.

    :returns: ``0`` on success, ``1`` if extraction or persistence failed.
    :rtype: int
    """
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    try:
        run_pipeline()
    except ExtractionError as e:
        print(f"Catalog extraction failed: {e}", file=sys.stderr)
        return 1
    except PersistenceError as e:
        print(f"Saving catalog failed: {e}", file=sys.stderr)
        return 1

    print("--- Scraping and enrichment complete! ---")
    return 0


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
