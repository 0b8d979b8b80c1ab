"""
Data access for companies.

Every statement is plain parameterized SQL run through
jobly.core.database.execute; rows come back already aliased to the
camelCase names the API uses.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional
from sqlalchemy.orm import Session

from jobly.core.database import execute
from jobly.core.errors import InvalidInput, NotFoundError
from jobly.helpers.sql import sql_for_company_filter, sql_for_partial_update

logger = logging.getLogger(__name__)

# Logical (API) field name -> column name, for fields whose names differ
JS_TO_SQL = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}

COMPANY_COLUMNS = (
    'handle, name, description, '
    'num_employees AS "numEmployees", logo_url AS "logoUrl"'
)


def create(db: Session, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Create a company.

    Args:
        db: Database session
        data: {handle, name, description, numEmployees, logoUrl}

    Returns:
        The new company {handle, name, description, numEmployees, logoUrl}

    Raises:
        InvalidInput: If a company with this handle already exists
    """
    duplicate = execute(
        db,
        """SELECT handle
           FROM companies
           WHERE handle = $1""",
        [data["handle"]])

    if duplicate:
        raise InvalidInput(f"Duplicate company: {data['handle']}")

    rows = execute(
        db,
        f"""INSERT INTO companies
              (handle, name, description, num_employees, logo_url)
           VALUES ($1, $2, $3, $4, $5)
           RETURNING {COMPANY_COLUMNS}""",
        [
            data["handle"],
            data["name"],
            data["description"],
            data.get("numEmployees"),
            data.get("logoUrl"),
        ])
    db.commit()

    logger.info(f"Created company {data['handle']}")
    return rows[0]


def find_all(db: Session, filters: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
    """
    Find companies, optionally filtered.

    Args:
        db: Database session
        filters: Any of {name, minEmployees, maxEmployees}

    Returns:
        List of companies ordered by name

    Raises:
        InvalidInput: On unknown filter keys or minEmployees > maxEmployees
    """
    where, values = sql_for_company_filter(filters)

    return execute(
        db,
        f"""SELECT {COMPANY_COLUMNS}
           FROM companies
           {where}
           ORDER BY name""",
        values)


def get(db: Session, handle: str) -> Dict[str, Any]:
    """
    Get a company with its jobs.

    Returns:
        {handle, name, description, numEmployees, logoUrl, jobs}
        where jobs is [{id, title, salary, equity}, ...]

    Raises:
        NotFoundError: If no such company
    """
    rows = execute(
        db,
        f"""SELECT {COMPANY_COLUMNS}
           FROM companies
           WHERE handle = $1""",
        [handle])

    if not rows:
        raise NotFoundError(f"No company: {handle}")

    company = rows[0]
    company["jobs"] = execute(
        db,
        """SELECT id, title, salary, equity
           FROM jobs
           WHERE company_handle = $1
           ORDER BY id""",
        [handle])

    return company


def update(db: Session, handle: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a company; only fields present in `data` change.

    Args:
        db: Database session
        handle: Company to update
        data: Any of {name, description, numEmployees, logoUrl}

    Returns:
        The updated company

    Raises:
        InvalidInput: If data is empty or tries to change the handle
        NotFoundError: If no such company
    """
    set_cols, values = sql_for_partial_update(data, JS_TO_SQL, immutable=("handle",))
    handle_idx = f"${len(values) + 1}"

    rows = execute(
        db,
        f"""UPDATE companies
           SET {set_cols}
           WHERE handle = {handle_idx}
           RETURNING {COMPANY_COLUMNS}""",
        [*values, handle])

    if not rows:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    db.commit()
    logger.info(f"Updated company {handle}: {', '.join(data)}")
    return rows[0]


def remove(db: Session, handle: str) -> None:
    """
    Delete a company (and, by cascade, its jobs).

    Raises:
        NotFoundError: If no such company
    """
    rows = execute(
        db,
        """DELETE
           FROM companies
           WHERE handle = $1
           RETURNING handle""",
        [handle])

    if not rows:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    db.commit()
    logger.info(f"Deleted company {handle}")


def exists(db: Session, handle: str) -> bool:
    """Return True if a company with this handle exists."""
    return bool(execute(db, "SELECT 1 FROM companies WHERE handle = $1", [handle]))
