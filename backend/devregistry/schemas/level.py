"""
Developer Registry — Level Schemas
====================================

What:  API contract for /niveis. The wire field for the label is `nivel`,
       matching the column name clients already use.
"""

from pydantic import BaseModel, Field


class LevelPayload(BaseModel):
    """Body of POST /niveis and PUT /niveis/{id}."""
    nivel: str = Field(description="Level label, must not be blank")


class LevelResponse(BaseModel):
    """A level annotated with its live developer count."""
    id: int = Field(description="Level identifier")
    nivel: str = Field(description="Level label")
    developer_count: int = Field(
        default=0,
        description="Number of developers currently referencing this level",
    )
