from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

class Service(BaseModel):
    """Identity of a monitored cluster.

    Used as a dictionary key across the runner, so it is frozen and
    compared by value.
    """
    model_config = ConfigDict(frozen=True)

    cluster_name: str
    port: int = Field(default=9042, ge=1, le=65535)
    username: Optional[str] = None
    password: Optional[str] = Field(default=None, repr=False)

    def __str__(self) -> str:
        return f"Service({self.cluster_name}:{self.port})"
