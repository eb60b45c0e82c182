from typing import Optional
from pydantic import BaseModel

class HealthResponse(BaseModel):
    status: str
    tracked_clusters: int
    connected_clusters: int
    last_refresh_at: Optional[float] = None
    last_poke_at: Optional[float] = None
