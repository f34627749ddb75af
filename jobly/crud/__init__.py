"""
CRUD operations (Create, Read, Update, Delete) for companies and jobs.

This layer sits between request handlers and the database. Collection
listings go through the filter builder and partial updates through the
SET-clause builder in jobly.core.
"""

from jobly.crud import company, job

__all__ = ["company", "job"]
