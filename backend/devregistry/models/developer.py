"""
Developer Registry — Developer SQLAlchemy Model
=================================================

What:  ORM model for the `desenvolvedor` table.
Who:   Used by DeveloperService for CRUD; joined with `nivel` for listings.

Column notes:
    - idade is written by the service at create/update time from
      data_nascimento and never recomputed on read
    - nivel_id is nullable; when set it must reference nivel.id. Deleting a
      referenced level is refused (ON DELETE RESTRICT, plus a service-level
      check that reports ReferentialIntegrityError)
"""

from datetime import date
from typing import Optional

from sqlalchemy import Date, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from devregistry.database import Base


class Developer(Base):
    """A registered developer with an optional level reference."""

    __tablename__ = "desenvolvedor"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column("nome", Text, nullable=False)
    sex: Mapped[str] = mapped_column("sexo", Text, nullable=False)
    birth_date: Mapped[date] = mapped_column("data_nascimento", Date, nullable=False)

    # Derived at write time: current_year - birth_year
    age: Mapped[int] = mapped_column("idade", Integer, nullable=False)

    hobby: Mapped[str] = mapped_column(Text, nullable=False)

    level_id: Mapped[Optional[int]] = mapped_column(
        "nivel_id",
        Integer,
        ForeignKey("nivel.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )

    def __repr__(self) -> str:
        return (
            f"<Developer(id={self.id}, name='{self.name}', "
            f"level_id={self.level_id})>"
        )
