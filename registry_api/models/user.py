"""User model."""
from sqlalchemy import Column, Date, Integer, String, Text
from registry_api.models.base import BaseModel


class User(BaseModel):
    """User entity.

    ``password_hash`` only ever holds bcrypt output. ``client_id`` points at
    a client record owned elsewhere and is not constrained by a foreign key.
    """

    # Quoted by SQLAlchemy: USER is a reserved word in PostgreSQL.
    __tablename__ = "User"

    name = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True)
    password_hash = Column(String(255), nullable=True)
    role = Column(String(50), nullable=True)
    dob = Column(Date, nullable=True)
    address = Column(Text, nullable=True)
    phone_number = Column(String(50), nullable=True)
    location = Column(String(255), nullable=True)
    client_id = Column(Integer, nullable=True)
    client_type = Column(String(50), nullable=True)
    registered_device_no = Column(String(100), nullable=True)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
