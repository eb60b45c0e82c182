from fastapi import APIRouter
from fastapi_injector import Injected
from cassandra_pulse.controllers.health.v1.schemas import HealthResponse
from cassandra_pulse.models import PulseStatus
from cassandra_pulse.services.runner import PulseRunner

router = APIRouter(prefix="/v1/health")

@router.get("")
def get_health(pulse_runner: PulseRunner = Injected(PulseRunner)) -> HealthResponse:
    # The runner swaps an immutable status after each activity
    status: PulseStatus = pulse_runner.status
    return HealthResponse(
        status="starting" if status.last_refresh_at is None else "running",
        tracked_clusters=status.tracked_clusters,
        connected_clusters=status.connected_clusters,
        last_refresh_at=status.last_refresh_at,
        last_poke_at=status.last_poke_at,
    )
