"""Shared data loading for quake-risk tools."""

import os

import pandas as pd

QUERY_COLUMNS = ["latitude", "longitude", "depth", "magnitude", "days_since_last_eq"]


def load_data(input_path):
    """Load query rows from CSV or Parquet.

    Returns a DataFrame, or None if the file does not exist.
    """
    if not os.path.isfile(input_path):
        return None
    if input_path.endswith(".parquet"):
        return pd.read_parquet(input_path)
    return pd.read_csv(input_path)


def save_data(df, output_path):
    if output_path.endswith(".parquet"):
        df.to_parquet(output_path, index=False)
    else:
        df.to_csv(output_path, index=False)
