"""Persistence and SQLModel definitions for the MoxieDash web frontend."""
from __future__ import annotations

from typing import Optional

from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlmodel import Field, Session, SQLModel, create_engine, select

from .config import SQLITE_FILE_NAME

# ---------------------------------------------------------------------------
# Database models
# ---------------------------------------------------------------------------
engine = create_engine(
    f"sqlite:///{SQLITE_FILE_NAME}",
    echo=False,
    connect_args={"check_same_thread": False},
)

# Ensure fresh metadata when re-importing in test contexts.
SQLModel.metadata.clear()


class SettingKV(SQLModel, table=True):
    k: str = Field(primary_key=True)
    v: str


class SqlStore:
    """:class:`~moxiedash.storage.KeyValueStore` backed by the ``settingkv`` table."""

    def __init__(self, bind=None) -> None:
        self._engine = bind if bind is not None else engine

    def get(self, key: str) -> Optional[str]:
        with Session(self._engine) as session:
            row = session.get(SettingKV, key)
            return row.v if row else None

    def set(self, key: str, value: str) -> None:
        with Session(self._engine) as session:
            statement = sqlite_insert(SettingKV).values(k=key, v=value)
            session.exec(statement.on_conflict_do_update(index_elements=["k"], set_={"v": value}))
            session.commit()

    def delete(self, key: str) -> None:
        with Session(self._engine) as session:
            row = session.get(SettingKV, key)
            if row is not None:
                session.delete(row)
                session.commit()

    def keys(self) -> tuple[str, ...]:
        with Session(self._engine) as session:
            return tuple(session.exec(select(SettingKV.k).order_by(SettingKV.k)).all())


# ---------------------------------------------------------------------------
# Database initialisation
# ---------------------------------------------------------------------------
def create_db_and_tables() -> None:
    SQLModel.metadata.create_all(engine)


create_db_and_tables()


__all__ = [
    "engine",
    "SettingKV",
    "SqlStore",
    "create_db_and_tables",
]
