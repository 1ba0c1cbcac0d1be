from datetime import datetime

import pytz
import sqlalchemy as sa
from pgvector.sqlalchemy import Vector
from sqlmodel import Column, Field, MetaData, SQLModel

SCHEMA = "knowledge"
TABLE_NAME = "code_chunks"

tz = pytz.timezone("Europe/Berlin")


class CodeChunkRecord(SQLModel, table=True):
    metadata = MetaData(schema=SCHEMA)
    __tablename__ = TABLE_NAME

    id: str = Field(sa_column=Column(sa.String(40), primary_key=True))
    repository: str = Field(index=True)
    branch: str = Field(index=True)
    file_path: str
    language: str
    chunk_index: int = 0
    content: str
    embedding: list[float] | None = Field(default=None, sa_column=Column(Vector))
    created_at: datetime = Field(
        sa_column=Column(sa.DateTime(), onupdate=lambda: datetime.now(tz))
    )
    updated_at: datetime | None = Field(
        sa_column=Column(sa.DateTime(), onupdate=lambda: datetime.now(tz))
    )
