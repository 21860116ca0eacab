"""
Developer Registry — Level SQLAlchemy Model
=============================================

What:  ORM model for the `nivel` table (developer seniority categories).
Who:   Used by LevelService for CRUD and by DeveloperService for the
       existence check behind `desenvolvedor.nivel_id`.

Table Design:
    - id: INTEGER PRIMARY KEY AUTOINCREMENT, so SQLite never hands out a
      deleted level's id again
    - nivel: display label, NOT NULL

    There is no stored developer counter. The number of developers per
    level is counted on every read (see LevelService.list_levels).
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from devregistry.database import Base


class Level(Base):
    """A named developer-seniority category (e.g. "Junior", "Senior")."""

    __tablename__ = "nivel"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(
        "nivel",
        Text,
        nullable=False,
        comment="Display label of the level",
    )

    def __repr__(self) -> str:
        return f"<Level(id={self.id}, name='{self.name}')>"
