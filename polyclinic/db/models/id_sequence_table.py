# polyclinic/db/models/id_sequence_table.py
from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from .db_base_model import DbBaseModel


class IdSequence(DbBaseModel):
    """Last numeric suffix handed out for one identifier prefix."""

    __tablename__ = "id_sequences"

    prefix: Mapped[str] = mapped_column(String(1), primary_key=True)
    last_value: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


__all__ = ["IdSequence"]
