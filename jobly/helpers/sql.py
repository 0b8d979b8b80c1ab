"""
Builders for the dynamic parts of repository SQL.

Each builder returns a ClauseResult: a SQL fragment using $1..$n
placeholders plus the values to bind to them, in placeholder order.
Nothing here touches the database.
"""

from dataclasses import dataclass
from numbers import Number
from typing import Any, Callable, Iterable, Mapping, NamedTuple, Optional, Tuple

from jobly.core.errors import InvalidInput


class ClauseResult(NamedTuple):
    """SQL fragment plus positional values; values[i] binds to $(i + 1)"""
    clause: str
    values: Tuple[Any, ...]


# Returned when a filter produces no predicates. Callers interpolate nothing
# and bind no values.
EMPTY_CLAUSE = ClauseResult("", ())


def sql_for_partial_update(
    data: Mapping[str, Any],
    js_to_sql: Mapping[str, str],
    *,
    immutable: Iterable[str] = ()
) -> ClauseResult:
    """
    Build the body of an UPDATE ... SET clause from a partial payload.

    {"firstName": "Aliya", "age": 32} with {"firstName": "first_name"}
    becomes '"first_name"=$1, "age"=$2' with values ("Aliya", 32).
    The caller binds its WHERE predicate at len(values) + 1.

    Args:
        data: Fields to change, in the order they should be emitted
        js_to_sql: Logical -> column name for fields whose names differ
        immutable: Fields that must never be updated (e.g. primary keys)

    Raises:
        InvalidInput: If data is empty or touches an immutable field
    """
    if not data:
        raise InvalidInput("No data")

    immutable = set(immutable)
    frozen = [key for key in data if key in immutable]
    if frozen:
        raise InvalidInput([f"Cannot update {key}" for key in frozen])

    cols = [
        f'"{js_to_sql.get(key, key)}"=${idx}'
        for idx, key in enumerate(data, start=1)
    ]

    return ClauseResult(", ".join(cols), tuple(data.values()))


def _is_set(value: Any) -> bool:
    return value is not None


def _is_true(value: Any) -> bool:
    return value is True


def _as_is(value: Any) -> Any:
    return value


def _contains(value: Any) -> str:
    return f"%{value}%"


@dataclass(frozen=True)
class FilterPredicate:
    """
    One allowed filter key and the predicate it produces.

    `template` holds a single "{}" where the placeholder goes. The predicate
    is emitted only when `applies(value)` is true.
    """
    key: str
    template: str
    transform: Callable[[Any], Any] = _as_is
    applies: Callable[[Any], bool] = _is_set


COMPANY_FILTERS = (
    FilterPredicate("name", "name ILIKE {}", transform=_contains),
    FilterPredicate("minEmployees", "num_employees >= {}"),
    FilterPredicate("maxEmployees", "num_employees <= {}"),
)

JOB_FILTERS = (
    FilterPredicate("title", "title ILIKE {}", transform=_contains),
    FilterPredicate("minSalary", "salary >= {}"),
    FilterPredicate("hasEquity", "equity > {}", transform=lambda _: 0, applies=_is_true),
)


def sql_for_filter(
    params: Optional[Mapping[str, Any]],
    predicates: Tuple[FilterPredicate, ...],
    checks: Iterable[Callable[[Mapping[str, Any]], None]] = ()
) -> ClauseResult:
    """
    Build a WHERE clause from filter params using a predicate table.

    Predicates are emitted in table order, whatever order params came in.
    All validation runs before any predicate is built.

    Returns:
        "WHERE a AND b ..." with its values, or EMPTY_CLAUSE when no
        predicate applies

    Raises:
        InvalidInput: If params has a key not in the table, or a check fails
    """
    if not params:
        return EMPTY_CLAUSE

    allowed = [predicate.key for predicate in predicates]
    unknown = [key for key in params if key not in allowed]
    if unknown:
        raise InvalidInput(
            f"Can only filter on {', '.join(allowed)} (got: {', '.join(unknown)})"
        )

    for check in checks:
        check(params)

    where = []
    values = []
    for predicate in predicates:
        value = params.get(predicate.key)
        if not predicate.applies(value):
            continue
        values.append(predicate.transform(value))
        where.append(predicate.template.format(f"${len(values)}"))

    if not where:
        return EMPTY_CLAUSE

    return ClauseResult("WHERE " + " AND ".join(where), tuple(values))


def _check_employee_range(params: Mapping[str, Any]) -> None:
    """Bounds must be numbers (not numeric strings) and min <= max"""
    for key in ("minEmployees", "maxEmployees"):
        value = params.get(key)
        if value is not None and (isinstance(value, bool) or not isinstance(value, Number)):
            raise InvalidInput(f"{key} must be a number")

    low = params.get("minEmployees")
    high = params.get("maxEmployees")
    if low is not None and high is not None and low > high:
        raise InvalidInput("Impossible min and max filters")


def sql_for_company_filter(params: Optional[Mapping[str, Any]]) -> ClauseResult:
    """Filter companies by name (partial, case-insensitive) and employee count"""
    return sql_for_filter(params, COMPANY_FILTERS, checks=(_check_employee_range,))


def sql_for_job_filter(params: Optional[Mapping[str, Any]]) -> ClauseResult:
    """Filter jobs by title (partial, case-insensitive), minimum salary, and equity"""
    return sql_for_filter(params, JOB_FILTERS)
