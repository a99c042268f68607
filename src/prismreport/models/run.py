# src/prismreport/models/run.py

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from .metrics import ClusterReportRow


class RunState(str, Enum):
    """States of a single target instance and of the run as a whole."""

    PENDING = "PENDING"
    FETCHING = "FETCHING"
    ASSEMBLING = "ASSEMBLING"
    DONE = "DONE"
    FAILED = "FAILED"


class RunFailure(BaseModel):
    """
    The single diagnostic reported when a run fails.
    """

    address: Optional[str] = Field(None, description="Address being processed when the error occurred.")
    stage: str = Field(..., description="Pipeline stage, e.g. 'inventory' or 'storage:alpha'.")
    error_type: str = Field(..., description="Name of the exception class.")
    message: str = Field(..., description="Error description.")

    def describe(self) -> str:
        where = f" for {self.address}" if self.address else ""
        return f"{self.error_type} during {self.stage}{where}: {self.message}"


class RunResult(BaseModel):
    """
    Outcome of one run. Rows are only populated when the run reached DONE.
    """

    state: RunState
    rows: List[ClusterReportRow] = Field(default_factory=list)
    failure: Optional[RunFailure] = None
    output_path: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.state == RunState.DONE
