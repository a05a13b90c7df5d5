from sqlalchemy import String, Boolean, Text, false
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from db.models.application import Application


class User(Base):
    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(25), primary_key=True)
    password: Mapped[str] = mapped_column(Text, nullable=False)
    first_name: Mapped[str] = mapped_column(Text, nullable=False)
    last_name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False)
    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())

    applications: Mapped[list["Application"]] = relationship(
        lazy="selectin",
        order_by="Application.job_id",
        passive_deletes=True,
    )

    @property
    def jobs(self) -> list[int]:
        return [application.job_id for application in self.applications]
