# import_streetlights.py
"""
Load a streetlight CSV into the Firestore `streetlights` collection used by
the route scoring.

Usage:
    python scripts/import_streetlights.py data/streetlights.csv
    python scripts/import_streetlights.py data/streetlights.csv --dry-run

Accepted coordinate columns (first match wins):
    latitude:  lat, latitude, y, 위도
    longitude: lng, lon, longitude, x, 경도
"""

import argparse
import logging

import pandas as pd

from safeway.services.firestore_store import FirestoreStore
from safeway.services.scoring_service import STREETLIGHT_COLLECTION
from safeway.utils.logging import setup_logging

logger = logging.getLogger("import_streetlights")

LAT_COLUMNS = ("lat", "latitude", "y", "위도")
LNG_COLUMNS = ("lng", "lon", "longitude", "x", "경도")


def _pick(columns, candidates):
    lowered = {c.lower(): c for c in columns}
    for name in candidates:
        if name in lowered:
            return lowered[name]
    return None


def load_streetlights_csv(path):
    """Return a DataFrame with numeric lat/lng columns, invalid rows dropped."""
    df = pd.read_csv(path)
    lat_col = _pick(df.columns, LAT_COLUMNS)
    lng_col = _pick(df.columns, LNG_COLUMNS)
    if lat_col is None or lng_col is None:
        raise ValueError(f"{path}: no latitude/longitude columns in {list(df.columns)}")
    out = pd.DataFrame({
        "lat": pd.to_numeric(df[lat_col], errors="coerce"),
        "lng": pd.to_numeric(df[lng_col], errors="coerce"),
    })
    out = out.dropna()
    out = out[out["lat"].between(-90, 90) & out["lng"].between(-180, 180)]
    return out.drop_duplicates().reset_index(drop=True)


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("csv")
    parser.add_argument("--dry-run", action="store_true")
    parser.add_argument("--batch-size", type=int, default=400)
    args = parser.parse_args()

    setup_logging()
    df = load_streetlights_csv(args.csv)
    logger.info("parsed %d streetlights from %s", len(df), args.csv)
    if args.dry_run:
        return
    written = FirestoreStore().add_many(STREETLIGHT_COLLECTION, df.to_dict(orient="records"),
                                        batch_size=args.batch_size)
    logger.info("wrote %d documents to %s", written, STREETLIGHT_COLLECTION)


if __name__ == "__main__":
    main()
