from sqlalchemy import String, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base


class Application(Base):
    __tablename__ = "applications"

    username: Mapped[str] = mapped_column(
        String(25), ForeignKey("users.username", ondelete="CASCADE"), primary_key=True
    )
    job_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("jobs.id", ondelete="CASCADE"), primary_key=True
    )
