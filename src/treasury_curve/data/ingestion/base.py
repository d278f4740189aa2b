# src/treasury_curve/data/ingestion/base.py
from abc import ABC, abstractmethod


class BaseIngestor(ABC):
    """Abstract base class for ingestion pipelines."""

    @abstractmethod
    def fetch_data(self, *args, **kwargs):
        """Fetch raw data from the source."""
        pass

    @abstractmethod
    def transform(self, raw_data):
        """Transform raw data into validated domain objects."""
        pass

    def run(self, *args, **kwargs):
        raw_data = self.fetch_data(*args, **kwargs)
        return self.transform(raw_data)
