"""
Repository functions (create, find, get, update, remove) per table.

This layer keeps SQL out of the API routes. Each module issues plain
parameterized SQL; dynamic WHERE/SET fragments come from jobly.helpers.sql.
"""

from jobly.crud import company, job, user

__all__ = ["company", "job", "user"]
