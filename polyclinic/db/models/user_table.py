# polyclinic/db/models/user_table.py
from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from .db_base_model import DbBaseModel


class User(DbBaseModel):
    __tablename__ = "users"

    user_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_name: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    email: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String(60), nullable=False)  # bcrypt
    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)


__all__ = ["User"]
