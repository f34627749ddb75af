"""
CRUD operations for companies.

Each function issues plain SQL through sqlalchemy.text() with bound
parameters and reshapes the returned rows into response schemas.
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
from jobly.models.company import COMPANY_FIELDS
from jobly.schemas.company import (
    CompanyCreate,
    CompanyDetailResponse,
    CompanyResponse,
    CompanyUpdate,
)
from jobly.schemas.job import JobResponse

logger = logging.getLogger(__name__)

COMPANY_COLUMNS = "handle, name, description, num_employees, logo_url"


def create(db: Session, company_data: CompanyCreate) -> CompanyResponse:
    """
    Create a new company.

    Args:
        db: Database session
        company_data: Company fields, handle included

    Returns:
        The stored company

    Raises:
        DuplicateError: If the handle or name is already taken
    """
    duplicate = db.execute(
        text("SELECT handle FROM companies WHERE handle = :handle"),
        {"handle": company_data.handle},
    ).first()
    if duplicate:
        logger.warning(f"Duplicate company: {company_data.handle}")
        raise DuplicateError(f"Duplicate company: {company_data.handle}")

    try:
        row = db.execute(
            text(
                "INSERT INTO companies (handle, name, description, num_employees, logo_url) "
                "VALUES (:handle, :name, :description, :num_employees, :logo_url) "
                f"RETURNING {COMPANY_COLUMNS}"
            ),
            company_data.model_dump(),
        ).mappings().one()
    except IntegrityError:
        db.rollback()
        raise DuplicateError(f"Duplicate company name: {company_data.name}")

    db.commit()
    logger.info(f"Created company {company_data.handle}")
    return CompanyResponse.model_validate(dict(row))


def find_all(db: Session, filters: Optional[Mapping[str, Any]] = None) -> List[CompanyResponse]:
    """
    List companies ordered by name.

    Args:
        db: Database session
        filters: Optional companyName / minEmployees / maxEmployees

    Returns:
        Companies matching every supplied filter
    """
    query = build_filter_query(EntityKind.COMPANY, filters)
    rows = db.execute(text(query.sql), query.params).mappings().all()
    return [CompanyResponse.model_validate(dict(row)) for row in rows]


def get(db: Session, handle: str) -> CompanyDetailResponse:
    """
    Retrieve a company and its jobs.

    Raises:
        NotFoundError: If no company has this handle
    """
    row = db.execute(
        text(f"SELECT {COMPANY_COLUMNS} FROM companies WHERE handle = :handle"),
        {"handle": handle},
    ).mappings().first()

    if row is None:
        raise NotFoundError(f"No company: {handle}")

    job_rows = db.execute(
        text(
            "SELECT title, salary, equity, company_handle FROM jobs "
            "WHERE company_handle = :handle ORDER BY title"
        ),
        {"handle": handle},
    ).mappings().all()

    return CompanyDetailResponse(
        **dict(row),
        jobs=[JobResponse.model_validate(dict(job)) for job in job_rows],
    )


def update(db: Session, handle: str, data: Mapping[str, Any]) -> CompanyResponse:
    """
    Partially update a company; fields not in `data` keep their value.

    Args:
        db: Database session
        handle: Company to update
        data: Any of name, description, numEmployees, logoUrl

    Returns:
        The updated company

    Raises:
        NoFieldsError: If data is empty
        ImmutableFieldError: If data contains handle
        InvalidFieldValueError: If a value breaks a field constraint
        NotFoundError: If no company has this handle
        DuplicateError: If the new name belongs to another company
    """
    check_update_fields(data, COMPANY_FIELDS)
    check_update_values(data, CompanyUpdate)
    partial = sql_for_partial_update(data, column_map(COMPANY_FIELDS))

    if "name" in data:
        taken = db.execute(
            text("SELECT handle FROM companies WHERE name = :name AND handle <> :handle"),
            {"name": data["name"], "handle": handle},
        ).first()
        if taken:
            raise DuplicateError(f"Duplicate company name: {data['name']}")

    query = text(
        f"UPDATE companies SET {partial.set_cols} "
        f"WHERE handle = :handle RETURNING {COMPANY_COLUMNS}"
    )
    try:
        row = db.execute(query, {**partial.params, "handle": handle}).mappings().first()
    except IntegrityError as e:
        db.rollback()
        raise BadRequestError(f"Invalid update for company {handle}: {e.orig}")

    if row is None:
        db.rollback()
        logger.warning(f"Update for missing company {handle}")
        raise NotFoundError(f"No company: {handle}")

    db.commit()
    logger.info(f"Updated company {handle}: {', '.join(data)}")
    return CompanyResponse.model_validate(dict(row))


def remove(db: Session, handle: str) -> None:
    """
    Delete a company and the jobs it owns.

    Raises:
        NotFoundError: If no company has this handle
    """
    db.execute(text("DELETE FROM jobs WHERE company_handle = :handle"), {"handle": handle})
    row = db.execute(
        text("DELETE FROM companies WHERE handle = :handle RETURNING handle"),
        {"handle": handle},
    ).first()

    if row is None:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    db.commit()
    logger.info(f"Deleted company {handle}")
