from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.projekt.models import Base

if TYPE_CHECKING:
    from app.projekt.modules.projects.models import Project


class Customer(Base):
    __tablename__ = "customers"
    __table_args__ = (
        Index("idx_customers_name", "name"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    # Not unique: lookups match case-insensitively and take the first hit.
    name: Mapped[str] = mapped_column(Text, nullable=False)

    # No delete cascade; removing a customer that still owns projects fails on save.
    projects: Mapped[list["Project"]] = relationship(
        "Project",
        back_populates="customer",
        order_by="Project.id",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"Customer(id={self.id!r}, name={self.name!r})"
