"""Configuration module for the building lookup."""

from building_health.config.settings import AggregatorSettings, DEFAULT_SETTINGS
from building_health.config.datasets import DatasetConfig, DATASETS, get_dataset, list_datasets

__all__ = [
    "AggregatorSettings",
    "DEFAULT_SETTINGS",
    "DatasetConfig",
    "DATASETS",
    "get_dataset",
    "list_datasets",
]
