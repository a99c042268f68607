# src/prismreport/models/cluster.py
"""
Pydantic models describing what is polled: the Prism Central endpoints
and the clusters they manage.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TargetInstance(BaseModel):
    """
    One Prism Central endpoint to poll during a run.
    """

    model_config = ConfigDict(frozen=True)

    address: str = Field(..., description="Prism Central VIP or hostname.")

    @field_validator("address")
    @classmethod
    def _strip_address(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Target address cannot be empty.")
        return value


class ClusterIdentity(BaseModel):
    """
    Identity of a single cluster registered with a Prism Central instance.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Cluster name, used as the join key.")
    external_address: str = Field(..., description="Cluster external (virtual) IP address.")
    unique_id: str = Field(..., description="Cluster UUID.")
