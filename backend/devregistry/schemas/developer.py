"""
Developer Registry — Developer Schemas
========================================

What:  API contract for /desenvolvedores.

Input coercion:
    The web client posts form state as-is, so `nivel_id` arrives as a number,
    a numeric string or "" (no level selected). Blank strings become None.
    `data_nascimento` is accepted as a string and parsed by the service so
    that a malformed date is reported as a regular validation error.
    A client-computed `idade` is ignored; the server always derives it.
"""

from datetime import date
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


class DeveloperPayload(BaseModel):
    """Body of POST /desenvolvedores and PUT /desenvolvedores/{id}."""
    nome: str = Field(description="Developer name")
    sexo: str = Field(description="Developer sex")
    data_nascimento: str = Field(description="Birth date, ISO 8601 (YYYY-MM-DD)")
    hobby: str = Field(description="Developer hobby")
    nivel_id: Optional[int] = Field(default=None, description="Referenced level id, optional")

    @field_validator("nivel_id", mode="before")
    @classmethod
    def blank_level_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class DeveloperResponse(BaseModel):
    """A stored developer, including the age computed at write time."""
    id: int
    nome: str
    sexo: str
    data_nascimento: date
    idade: int = Field(description="current_year - birth_year at last write")
    hobby: str
    nivel_id: Optional[int] = None


class DeveloperListItem(DeveloperResponse):
    """Developer enriched with the referenced level's name ("N/A" if none)."""
    nivel_nome: str = Field(default="N/A", description="Display name of the referenced level")
