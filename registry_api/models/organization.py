"""Organization model."""
from sqlalchemy import Column, Numeric, String, Text
from registry_api.models.base import BaseModel


class Organization(BaseModel):
    """Organization entity: a customer company billed per unit.

    Rows are fully replaced on update; there is no soft delete.
    """

    __tablename__ = "organization"

    org_name = Column(String(255), nullable=True)
    type = Column(String(100), nullable=True)
    industry = Column(String(100), nullable=True)
    address = Column(Text, nullable=True)
    poc_name = Column(String(255), nullable=True)
    poc_email = Column(String(255), nullable=True)
    price_per_unit = Column(Numeric(12, 2), nullable=True)

    def __repr__(self) -> str:
        return f"<Organization(id={self.id}, org_name={self.org_name})>"
