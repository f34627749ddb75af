from decimal import Decimal
from sqlalchemy import Column, Integer, Numeric, String, Text, ForeignKey, CheckConstraint, UniqueConstraint
from jobly.core.database import Base
from jobly.core.sql import ColumnField


class Job(Base):
    """
    Job table.

    Jobs are looked up by (title, company_handle). The integer id is a
    storage detail and is never exposed; the unique constraint backs the
    duplicate check done before inserts.
    """
    __tablename__ = "jobs"
    __table_args__ = (
        UniqueConstraint("title", "company_handle", name="uq_jobs_title_company_handle"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False, index=True)
    salary = Column(Integer, CheckConstraint("salary >= 0"), nullable=True)
    equity = Column(Numeric, CheckConstraint("equity >= 0 AND equity <= 1.0"), nullable=True)
    company_handle = Column(
        String(25),
        ForeignKey("companies.handle", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    def __repr__(self):
        return f"<Job(title='{self.title}', company_handle='{self.company_handle}')>"


JOB_FIELDS = (
    ColumnField("title", "title", (str,), nullable=False),
    ColumnField("salary", "salary", (int,)),
    ColumnField("equity", "equity", (str, Decimal, float, int)),
    ColumnField("companyHandle", "company_handle", (str,), nullable=False, mutable=False),
)
