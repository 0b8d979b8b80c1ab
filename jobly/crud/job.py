"""
Data access for jobs.

Same conventions as jobly.crud.company: raw parameterized SQL, rows
aliased to camelCase, NotFoundError when the target row is missing.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional
from sqlalchemy.orm import Session

from jobly.core.database import execute
from jobly.core.errors import NotFoundError
from jobly.crud.company import COMPANY_COLUMNS
from jobly.helpers.sql import sql_for_job_filter, sql_for_partial_update

logger = logging.getLogger(__name__)

JS_TO_SQL = {
    "companyHandle": "company_handle",
}

# A job keeps its id and its company for life
IMMUTABLE_FIELDS = ("id", "companyHandle")

JOB_COLUMNS = 'id, title, salary, equity, company_handle AS "companyHandle"'


def create(db: Session, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Create a job.

    Args:
        db: Database session
        data: {title, salary, equity, companyHandle}

    Returns:
        The new job {id, title, salary, equity, companyHandle}
    """
    rows = execute(
        db,
        f"""INSERT INTO jobs (title, salary, equity, company_handle)
           VALUES ($1, $2, $3, $4)
           RETURNING {JOB_COLUMNS}""",
        [
            data["title"],
            data.get("salary"),
            data.get("equity"),
            data["companyHandle"],
        ])
    db.commit()

    job = rows[0]
    logger.info(f"Created job {job['id']}: {job['title']} at {job['companyHandle']}")
    return job


def find_all(db: Session, filters: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
    """
    Find jobs, optionally filtered.

    Args:
        db: Database session
        filters: Any of {title, minSalary, hasEquity}

    Returns:
        List of {id, title, salary, equity, companyHandle, companyName}
        ordered by title

    Raises:
        InvalidInput: On unknown filter keys
    """
    where, values = sql_for_job_filter(filters)

    return execute(
        db,
        f"""SELECT id,
                  title,
                  salary,
                  equity,
                  company_handle AS "companyHandle",
                  c.name AS "companyName"
           FROM jobs
           LEFT JOIN companies AS c ON c.handle = jobs.company_handle
           {where}
           ORDER BY title, id""",
        values)


def get(db: Session, job_id: int) -> Dict[str, Any]:
    """
    Get a job with the company that posted it.

    Returns:
        {id, title, salary, equity, company}
        where company is {handle, name, description, numEmployees, logoUrl}

    Raises:
        NotFoundError: If no such job
    """
    rows = execute(
        db,
        f"""SELECT {JOB_COLUMNS}
           FROM jobs
           WHERE id = $1""",
        [job_id])

    if not rows:
        raise NotFoundError(f"No job: {job_id}")

    job = rows[0]
    companies = execute(
        db,
        f"""SELECT {COMPANY_COLUMNS}
           FROM companies
           WHERE handle = $1""",
        [job.pop("companyHandle")])

    job["company"] = companies[0]
    return job


def update(db: Session, job_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a job; only fields present in `data` change.

    Args:
        db: Database session
        job_id: Job to update
        data: Any of {title, salary, equity}

    Returns:
        The updated job {id, title, salary, equity, companyHandle}

    Raises:
        InvalidInput: If data is empty or touches id/companyHandle
        NotFoundError: If no such job
    """
    set_cols, values = sql_for_partial_update(data, JS_TO_SQL, immutable=IMMUTABLE_FIELDS)
    id_idx = f"${len(values) + 1}"

    rows = execute(
        db,
        f"""UPDATE jobs
           SET {set_cols}
           WHERE id = {id_idx}
           RETURNING {JOB_COLUMNS}""",
        [*values, job_id])

    if not rows:
        db.rollback()
        raise NotFoundError(f"No job: {job_id}")

    db.commit()
    logger.info(f"Updated job {job_id}: {', '.join(data)}")
    return rows[0]


def remove(db: Session, job_id: int) -> None:
    """
    Delete a job.

    Raises:
        NotFoundError: If no such job
    """
    rows = execute(
        db,
        """DELETE
           FROM jobs
           WHERE id = $1
           RETURNING id""",
        [job_id])

    if not rows:
        db.rollback()
        raise NotFoundError(f"No job: {job_id}")

    db.commit()
    logger.info(f"Deleted job {job_id}")
