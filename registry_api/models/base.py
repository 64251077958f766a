"""Base SQLAlchemy model with a storage generated integer primary key."""

from sqlalchemy import Column, Integer
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class BaseModel(Base):
    """Base model whose id is assigned by the database on insert."""

    __abstract__ = True

    id = Column(Integer, primary_key=True, autoincrement=True, nullable=False)
