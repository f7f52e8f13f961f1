from pydantic import BaseModel


class AccessDecision(BaseModel):
    role: str
    resource: str
    action: str
    allowed: bool


class RouteAccess(BaseModel):
    path: str
    allowed: bool
