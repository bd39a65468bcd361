from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import Boolean, Integer, Text, false
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


# Only these columns may be touched by an update.
UPDATABLE_FIELDS = frozenset({"completed", "name"})


# ---------- Database Models ----------
class TaskDB(Base):
    __tablename__ = "task"
    # AUTOINCREMENT keeps SQLite from handing out the id of a deleted last row again.
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())

    def __repr__(self) -> str:
        return f"Task(id: {self.id}, name: '{self.name}', completed: {self.completed})"

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "completed": bool(self.completed)}


# ---------- Data Models ----------
class TaskCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = None


class TaskUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    completed: bool | None = None
    name: str | None = None

    def supplied_fields(self) -> dict:
        fields = self.model_dump(exclude_unset=True, exclude_none=True)
        return {key: value for key, value in fields.items() if key in UPDATABLE_FIELDS}


class TaskOut(BaseModel):
    id: Annotated[int, Field(gt=0)]
    name: str
    completed: bool = False


class Message(BaseModel):
    message: str
