from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Float, Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class DBViewerSample(Base):
    __tablename__ = "viewer_samples"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    partition_key: Mapped[str] = mapped_column(String(10))  # YYYY-MM-DD
    row_key: Mapped[str] = mapped_column(String(2))  # UTC hour "0".."23", not zero-padded
    viewers: Mapped[int] = mapped_column(Integer, default=0)
    category_id: Mapped[str] = mapped_column(String(64), default="")
    category_name: Mapped[str] = mapped_column(String(256), default="")
    collected_at: Mapped[datetime] = mapped_column(DateTime, index=True)

    __table_args__ = (
        Index("ix_viewer_samples_partition_row", "partition_key", "row_key", unique=True),
    )


class DBCollectRun(Base):
    __tablename__ = "collect_runs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    category_name: Mapped[str] = mapped_column(String(256), default="")
    status: Mapped[str] = mapped_column(String(20))
    viewers: Mapped[int | None] = mapped_column(Integer, nullable=True)
    error_message: Mapped[str] = mapped_column(Text, default="")
    duration_seconds: Mapped[float] = mapped_column(Float, default=0.0)
    started_at: Mapped[datetime] = mapped_column(DateTime, index=True)
    finished_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
