"""Database models."""
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class Option(Base):
    """Option model - key-value settings shared by all modules."""
    __tablename__ = "options"

    id: Mapped[int] = mapped_column(primary_key=True)
    option_name: Mapped[str] = mapped_column(String(191), unique=True, nullable=False)
    option_value: Mapped[Any] = mapped_column(JSON, nullable=True)
    autoload: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    def __repr__(self) -> str:
        return f"<Option(name={self.option_name}, autoload={self.autoload})>"
