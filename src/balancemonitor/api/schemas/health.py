from balancemonitor.api.schemas.common import ApiModel


class HealthResponse(ApiModel):
    healthy: bool
    unhealthy_reasons: list[str] = []
