"""
Application error taxonomy.

Repositories and the SQL helpers raise these; main.py renders them as
{"error": {"message": ..., "status": ...}} with the matching HTTP status.
Database driver errors (sqlalchemy.exc.SQLAlchemyError) are not part of
this hierarchy and surface as 500s.
"""

from typing import List, Union


class AppError(Exception):
    """Base class for errors that map onto an HTTP client error"""

    status_code: int = 500

    def __init__(self, message: Union[str, List[str]]):
        self.messages = [message] if isinstance(message, str) else list(message)
        super().__init__("; ".join(self.messages))

    @property
    def message(self) -> Union[str, List[str]]:
        return self.messages[0] if len(self.messages) == 1 else self.messages


class InvalidInput(AppError):
    """Caller supplied data that cannot be turned into a valid query (400)"""
    status_code = 400


class UnauthorizedError(AppError):
    """Missing, invalid, or insufficient credentials (401)"""
    status_code = 401


class NotFoundError(AppError):
    """Requested record does not exist (404)"""
    status_code = 404


def validation_messages(errors: List[dict]) -> List[str]:
    """Turn pydantic error dicts into "field: problem" strings"""
    messages = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query")]
        field = ".".join(loc)
        messages.append(f"{field}: {error['msg']}" if field else error["msg"])
    return messages
