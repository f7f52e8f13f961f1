from pydantic import BaseModel


class RetentionCleanupResponse(BaseModel):
    retention_days: int
    removed_events: int
