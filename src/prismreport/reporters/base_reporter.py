# src/prismreport/reporters/base_reporter.py
"""
Defines the abstract base class for all reporters.
"""

from abc import ABC, abstractmethod
from typing import List

from ..models.metrics import ClusterReportRow
from ..models.run import RunFailure


class BaseReporter(ABC):
    """
    Abstract Base Class for all reporters.
    """

    @abstractmethod
    def report(self, data: List[ClusterReportRow]):
        """
        Takes the assembled rows and presents them in a specific format.
        """
        pass

    @abstractmethod
    def report_failure(self, failure: RunFailure):
        """
        Presents the single diagnostic of a failed run.
        """
        pass
