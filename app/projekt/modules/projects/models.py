from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.projekt.models import Base

if TYPE_CHECKING:
    from app.projekt.modules.customers.models import Customer


class Project(Base):
    __tablename__ = "projects"
    __table_args__ = (
        Index("idx_projects_customer_id", "customer_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)

    customer_id: Mapped[int] = mapped_column(ForeignKey("customers.id"), nullable=False)

    customer: Mapped[Customer | None] = relationship("Customer", back_populates="projects", lazy="selectin")

    def __repr__(self) -> str:
        return f"Project(id={self.id!r}, name={self.name!r}, customer_id={self.customer_id!r})"
