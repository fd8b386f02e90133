import logging
from abc import ABC, abstractmethod
from typing import Any

logger = logging.getLogger(__name__)


class DataPipeline(ABC):
    """
    Abstract base class for workbook treatments.
    Follows an Extract -> Transform -> Load (ETL) pattern. Any step may raise;
    nothing is written unless all three steps complete.
    """

    def __init__(self, report_type: str, test_mode: bool = False):
        self.report_type = report_type
        self.test_mode = test_mode

    def run(self) -> Any:
        """
        Orchestrates the pipeline execution and returns what `load` returns.
        """
        logger.info("═" * 50)
        logger.info(f"🚀 STEP: {self.report_type.upper()}")
        logger.info("═" * 50)

        # --- 1. EXTRACT ---
        raw_data = self.extract()

        # --- 2. TRANSFORM ---
        transformed = self.transform(raw_data)

        # --- 3. LOAD ---
        result = self.load(transformed)

        logger.info(f"🎉 {self.report_type.capitalize()} pipeline finished.")
        logger.info("═" * 50)
        return result

    @abstractmethod
    def extract(self) -> Any:
        """Reads the inputs and returns them in memory."""
        pass

    @abstractmethod
    def transform(self, data: Any) -> Any:
        """Applies the treatment to the in-memory data."""
        pass

    @abstractmethod
    def load(self, data: Any) -> Any:
        """Persists the result and notifies. The only step allowed to write."""
        pass
