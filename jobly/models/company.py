from sqlalchemy import Column, String, Text, Integer, CheckConstraint
from jobly.core.database import Base
from jobly.core.sql import ColumnField


class Company(Base):
    """
    Company table. handle is the natural primary key and never changes
    after creation.
    """
    __tablename__ = "companies"

    handle = Column(String(25), primary_key=True)
    name = Column(Text, nullable=False, unique=True)
    description = Column(Text, nullable=False)
    num_employees = Column(Integer, CheckConstraint("num_employees >= 0"), nullable=True)
    logo_url = Column(Text, nullable=True)

    def __repr__(self):
        return f"<Company(handle='{self.handle}', name='{self.name}')>"


# Domain name -> column, in the order fields are exposed
COMPANY_FIELDS = (
    ColumnField("handle", "handle", (str,), nullable=False, mutable=False),
    ColumnField("name", "name", (str,), nullable=False),
    ColumnField("description", "description", (str,), nullable=False),
    ColumnField("numEmployees", "num_employees", (int,)),
    ColumnField("logoUrl", "logo_url", (str,)),
)
