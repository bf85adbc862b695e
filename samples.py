"""Loading of the bundled sample datasets (fake.csv, real.csv, manual_testing.csv)."""

from pathlib import Path
from typing import Dict, List, Optional, Union

import pandas as pd

from config import settings
from logger import get_logger

log = get_logger("samples")

DATASET_NAMES = ("fake", "real", "manual_testing")

Row = Dict[str, str]


# Receives any fields past the header; a row that fills it is skipped.
OVERFLOW_COLUMN = "__overflow__"

CSV_OPTIONS = dict(
    dtype=str,
    keep_default_na=False,
    skipinitialspace=True,
    skip_blank_lines=True,
    index_col=False,
)


def dataset_path(name: str, data_dir: Optional[Union[str, Path]] = None) -> Path:
    return Path(data_dir or settings.DATA_DIR) / f"{name}.csv"


def read_dataset(path: Path, limit: Optional[int] = None) -> List[Row]:
    """Read one CSV file into a list of header -> string mappings.

    Every cell comes back as a stripped string; missing cells are "".
    Lines with more non-empty fields than the header are skipped.
    """
    header = list(pd.read_csv(path, nrows=0, **CSV_OPTIONS).columns)
    df = pd.read_csv(
        path,
        header=0,
        names=header + [OVERFLOW_COLUMN],
        on_bad_lines="skip",
        **CSV_OPTIONS,
    )
    df = df[df[OVERFLOW_COLUMN].fillna("").str.strip() == ""]
    df = df.drop(columns=OVERFLOW_COLUMN)
    if limit is not None:
        df = df.head(limit)

    df.columns = [str(column).strip() for column in df.columns]
    df = df.fillna("")
    for column in df.columns:
        df[column] = df[column].astype(str).str.strip()
    return df.to_dict(orient="records")


def load_datasets(
    data_dir: Optional[Union[str, Path]] = None, limit: Optional[int] = None
) -> Dict[str, List[Row]]:
    """Load every known dataset; a missing or unreadable file yields []."""
    news_data: Dict[str, List[Row]] = {}

    for name in DATASET_NAMES:
        path = dataset_path(name, data_dir)
        if not path.exists():
            log.info("File not found: {}", path)
            news_data[name] = []
            continue

        try:
            rows = read_dataset(path, limit=limit)
        except pd.errors.EmptyDataError:
            log.info("File is empty: {}", path)
            rows = []
        except (OSError, ValueError) as e:
            log.error("Error reading {}: {}", path.name, e)
            rows = []
        else:
            log.debug("Parsed {} rows from {}", len(rows), path.name)

        news_data[name] = rows

    log.info(
        "CSV data loaded: {}",
        ", ".join(f"{name}: {len(rows)} items" for name, rows in news_data.items()),
    )
    return news_data


def dataset_availability(data_dir: Optional[Union[str, Path]] = None) -> Dict[str, bool]:
    return {name: dataset_path(name, data_dir).exists() for name in DATASET_NAMES}
