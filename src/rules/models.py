from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SessionCookieRules(BaseModel):
    secure: bool = False
    http_only: bool = True
    same_site: str = "lax"


class SessionsRules(BaseModel):
    ttl_minutes: int = Field(gt=0)
    cookie: SessionCookieRules = Field(default_factory=SessionCookieRules)


class RbacRules(BaseModel):
    roles: dict[str, list[str]]
    public_permissions: list[str]


class AbacRule(BaseModel):
    if_condition: dict[str, Any] = Field(alias="if")
    allow: list[str]

    model_config = ConfigDict(populate_by_name=True)


class AbacRules(BaseModel):
    page_rules: list[AbacRule]


class Rules(BaseModel):
    rbac: RbacRules
    abac: AbacRules
    sessions: SessionsRules
