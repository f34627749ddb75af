"""
CRUD operations for jobs.

A job is identified by its (title, company_handle) pair; every lookup,
update and delete takes both.
"""

import logging
from typing import Any, List, Mapping, Optional
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.core.errors import BadRequestError, DuplicateError, NotFoundError
from jobly.core.filters import EntityKind, build_filter_query
from jobly.core.sql import (
    check_update_fields,
    check_update_values,
    column_map,
    sql_for_partial_update,
)
from jobly.models.job import JOB_FIELDS
from jobly.schemas.job import JobCreate, JobResponse, JobUpdate

logger = logging.getLogger(__name__)

JOB_COLUMNS = "title, salary, equity, company_handle"


def _exists(db: Session, title: str, company_handle: str) -> bool:
    return db.execute(
        text("SELECT title FROM jobs WHERE title = :title AND company_handle = :company_handle"),
        {"title": title, "company_handle": company_handle},
    ).first() is not None


def create(db: Session, job_data: JobCreate) -> JobResponse:
    """
    Create a new job.

    Args:
        db: Database session
        job_data: Validated job data

    Returns:
        The stored job

    Raises:
        DuplicateError: If the company already has a job with this title
        NotFoundError: If the company does not exist
    """
    if _exists(db, job_data.title, job_data.company_handle):
        logger.warning(f"Duplicate job: {job_data.title} at company: {job_data.company_handle}")
        raise DuplicateError(f"Duplicate job: {job_data.title} at company: {job_data.company_handle}")

    company = db.execute(
        text("SELECT handle FROM companies WHERE handle = :handle"),
        {"handle": job_data.company_handle},
    ).first()
    if company is None:
        raise NotFoundError(f"No company: {job_data.company_handle}")

    try:
        row = db.execute(
            text(
                "INSERT INTO jobs (title, salary, equity, company_handle) "
                "VALUES (:title, :salary, :equity, :company_handle) "
                f"RETURNING {JOB_COLUMNS}"
            ),
            job_data.model_dump(),
        ).mappings().one()
    except IntegrityError:
        db.rollback()
        raise DuplicateError(f"Duplicate job: {job_data.title} at company: {job_data.company_handle}")

    db.commit()
    logger.info(f"Created job {job_data.title} at {job_data.company_handle}")
    return JobResponse.model_validate(dict(row))


def find_all(db: Session, filters: Optional[Mapping[str, Any]] = None) -> List[JobResponse]:
    """
    List jobs ordered by title.

    Args:
        db: Database session
        filters: Optional title / minSalary / hasEquity

    Returns:
        Jobs matching every supplied filter
    """
    query = build_filter_query(EntityKind.JOB, filters)
    rows = db.execute(text(query.sql), query.params).mappings().all()
    return [JobResponse.model_validate(dict(row)) for row in rows]


def get(db: Session, title: str, company_handle: str) -> JobResponse:
    """
    Retrieve a job by title and company.

    Raises:
        NotFoundError: If the company has no job with this title
    """
    row = db.execute(
        text(
            f"SELECT {JOB_COLUMNS} FROM jobs "
            "WHERE title = :title AND company_handle = :company_handle"
        ),
        {"title": title, "company_handle": company_handle},
    ).mappings().first()

    if row is None:
        raise NotFoundError(f"No job: {title} at company: {company_handle}")

    return JobResponse.model_validate(dict(row))


def update(db: Session, title: str, company_handle: str, data: Mapping[str, Any]) -> JobResponse:
    """
    Partially update a job; fields not in `data` keep their value.

    Args:
        db: Database session
        title: Current job title
        company_handle: Owning company
        data: Any of title, salary, equity

    Returns:
        The updated job

    Raises:
        ImmutableFieldError: If data contains companyHandle
        InvalidFieldValueError: If a value breaks a field constraint
        NoFieldsError: If data is empty
        DuplicateError: If renaming onto another job of the same company
        NotFoundError: If the job does not exist
    """
    check_update_fields(data, JOB_FIELDS)
    check_update_values(data, JobUpdate)
    partial = sql_for_partial_update(data, column_map(JOB_FIELDS))

    new_title = data.get("title", title)
    if new_title != title and _exists(db, new_title, company_handle):
        raise DuplicateError(f"Duplicate job: {new_title} at company: {company_handle}")

    query = text(
        f"UPDATE jobs SET {partial.set_cols} "
        "WHERE title = :title AND company_handle = :company_handle "
        f"RETURNING {JOB_COLUMNS}"
    )
    try:
        row = db.execute(
            query,
            {**partial.params, "title": title, "company_handle": company_handle},
        ).mappings().first()
    except IntegrityError as e:
        db.rollback()
        raise BadRequestError(f"Invalid update for job {title} at company {company_handle}: {e.orig}")

    if row is None:
        db.rollback()
        logger.warning(f"Update for missing job {title} at {company_handle}")
        raise NotFoundError(f"No job: {title} at company: {company_handle}")

    db.commit()
    logger.info(f"Updated job {title} at {company_handle}: {', '.join(data)}")
    return JobResponse.model_validate(dict(row))


def remove(db: Session, title: str, company_handle: str) -> None:
    """
    Delete a job.

    Raises:
        NotFoundError: If the job does not exist
    """
    row = db.execute(
        text(
            "DELETE FROM jobs WHERE title = :title AND company_handle = :company_handle "
            "RETURNING title"
        ),
        {"title": title, "company_handle": company_handle},
    ).first()

    if row is None:
        db.rollback()
        raise NotFoundError(f"No job: {title} at company: {company_handle}")

    db.commit()
    logger.info(f"Deleted job {title} at {company_handle}")
