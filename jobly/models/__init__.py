"""
Database models package.
"""

from jobly.models.company import Company, COMPANY_FIELDS
from jobly.models.job import Job, JOB_FIELDS

__all__ = ["Company", "COMPANY_FIELDS", "Job", "JOB_FIELDS"]
