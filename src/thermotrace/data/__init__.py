"""Fixture contracts, loading, and timestep parsing."""

from thermotrace.data.contracts import CHILLER_FIELDS, ChillerFieldNames, Dataset, Record, required_fields
from thermotrace.data.loader import (
    DATASET_ENV_VAR,
    DEFAULT_DATASET_PATH,
    DatasetLoader,
    clear_loader_cache,
    get_loader,
    load_dataset,
    read_dataset,
    resolve_dataset_path,
    sanitize_nan_literals,
)
from thermotrace.data.parser import dataset_length, parse_timestep

__all__ = [
    "CHILLER_FIELDS",
    "DATASET_ENV_VAR",
    "DEFAULT_DATASET_PATH",
    "ChillerFieldNames",
    "Dataset",
    "DatasetLoader",
    "Record",
    "clear_loader_cache",
    "dataset_length",
    "get_loader",
    "load_dataset",
    "parse_timestep",
    "read_dataset",
    "required_fields",
    "resolve_dataset_path",
    "sanitize_nan_literals",
]
