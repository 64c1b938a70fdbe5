from typing import Any

from jobly.errors import InvalidInputError
from jobly.schemas.job import JobFilter


def sql_for_partial_update(
    data_to_update: dict[str, Any], js_to_sql: dict[str, str]
) -> tuple[str, list[Any]]:
    """Build the SET part of a partial UPDATE statement.

    ``data_to_update`` maps field names to their new values and ``js_to_sql``
    maps field names to column names where the two differ. Fields missing from
    ``js_to_sql`` are used as column names unchanged.

        >>> sql_for_partial_update({"firstName": "Aliya", "age": 32},
        ...                        {"firstName": "first_name"})
        ('"first_name"=$1, "age"=$2', ['Aliya', 32])

    The caller appends its own WHERE clause, numbering its placeholders from
    ``len(values) + 1``.
    """
    if not data_to_update:
        raise InvalidInputError("No data")

    cols = [
        f'"{js_to_sql.get(field, field)}"=${idx}'
        for idx, field in enumerate(data_to_update, start=1)
    ]
    return ", ".join(cols), list(data_to_update.values())


def sql_for_job_filters(filters: JobFilter) -> tuple[str, list[Any]]:
    """Build the WHERE condition for a job search.

    Returns an empty string and no values when no filter is set, in which case
    the caller leaves out the WHERE keyword.
    """
    if (
        filters.min_salary is not None
        and filters.max_salary is not None
        and filters.min_salary > filters.max_salary
    ):
        raise InvalidInputError("minSalary cannot be greater than maxSalary")

    where_expressions: list[str] = []
    values: list[Any] = []

    if filters.title:
        values.append(f"%{filters.title}%")
        where_expressions.append(f"lower(title) LIKE lower(${len(values)})")

    if filters.min_salary is not None:
        values.append(filters.min_salary)
        where_expressions.append(f"salary >= ${len(values)}")

    if filters.max_salary is not None:
        values.append(filters.max_salary)
        where_expressions.append(f"salary <= ${len(values)}")

    if filters.has_equity is True:
        where_expressions.append("equity > 0")
    elif filters.has_equity is False:
        where_expressions.append("(equity IS NULL OR equity = 0)")

    return " AND ".join(where_expressions), values
