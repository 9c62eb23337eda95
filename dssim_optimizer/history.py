import os

import pandas as pd

from .algorithms import SearchResult

COLUMNS = ["Iter", "Quality", "DSSIM", "Direction", "Step", "Encoder", "Outcome"]


def history_to_dataframe(result: SearchResult, encoder: str = "") -> pd.DataFrame:
    """One row per evaluation, in the order they were made."""
    rows = [
        {
            "Iter": r.iteration,
            "Quality": r.quality,
            "DSSIM": r.score,
            "Direction": r.direction.value if r.direction is not None else "",
            "Step": r.step,
            "Encoder": encoder,
            "Outcome": result.outcome.value,
        }
        for r in result.records
    ]
    return pd.DataFrame(rows, columns=COLUMNS)


def save_history(result: SearchResult, csv_path: str, encoder: str = "", append=False):
    """Write the run history as CSV. With append=True runs accumulate in one file."""
    df = history_to_dataframe(result, encoder)
    write_header = not (append and os.path.exists(csv_path))
    df.to_csv(csv_path, mode="a" if append else "w", header=write_header, index=False)
    return df


def load_history(csv_path: str) -> pd.DataFrame:
    df = pd.read_csv(csv_path, keep_default_na=False)
    df["Quality"] = pd.to_numeric(df["Quality"], errors="coerce")
    df["DSSIM"] = pd.to_numeric(df["DSSIM"], errors="coerce")
    return df
