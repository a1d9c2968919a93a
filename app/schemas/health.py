from pydantic import BaseModel


class HealthCheckResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str
    timestamp: str
    document_store: str
    storage_provider: str
