"""Abstract base class for schedule transformers."""

from abc import ABC, abstractmethod
from typing import Any, BinaryIO

from scraper.models import ScheduleEntry


class BaseTransformer(ABC):
    """Abstract base class defining the interface for schedule transformers.

    Extend this class to implement transformers for other output formats
    (e.g., CSV, JSON).
    """

    @abstractmethod
    def transform(self, entries: list[ScheduleEntry]) -> Any:
        """Transform schedule entries into the target format.

        Args:
            entries: Schedule entries to transform, in output order.

        Returns:
            Transformed data in the target format.
        """
        pass

    @abstractmethod
    def write(self, stream: BinaryIO) -> None:
        """Write the transformed data to a binary stream.

        Args:
            stream: Destination, e.g. sys.stdout.buffer.
        """
        pass
