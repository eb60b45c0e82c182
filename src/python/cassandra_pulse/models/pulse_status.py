from typing import Optional
from pydantic import BaseModel, ConfigDict

class PulseStatus(BaseModel):
    model_config = ConfigDict(frozen=True)

    tracked_clusters: int = 0
    connected_clusters: int = 0
    last_refresh_at: Optional[float] = None
    last_poke_at: Optional[float] = None
