"""Standalone functions encapsulating some of the boilerplate in common DB accessors."""
from typing import cast


class GetSingleResult:
    """Convenience accessors for queries expected to return at most one row."""

    @staticmethod
    def row(cursor, query: str, parameters: tuple | None=None) -> tuple | None:
        """
        "Optimistically" return the first result row for a given query.
        """
        if not parameters is None:
            cursor.execute(query, parameters)
        else:
            cursor.execute(query)
        rows = cursor.fetchall()
        if len(rows) > 0:
            return tuple(rows[0])
        return None

    @staticmethod
    def _value(cursor, query: str, parameters: tuple | None=None, or_else_value=None):
        row = GetSingleResult.row(cursor, query, parameters=parameters)
        if row is None:
            return or_else_value
        return row[0]

    @classmethod
    def integer(cls, cursor, query: str, parameters: tuple | None=None, or_else_value: int=0) -> int:
        return cast(int, cls._value(cursor, query, parameters=parameters, or_else_value=or_else_value))

    @classmethod
    def string(
        cls,
        cursor,
        query: str,
        parameters: tuple | None=None,
        or_else_value: str | None='',
    ) -> str | None:
        return cast(str | None, cls._value(cursor, query, parameters=parameters, or_else_value=or_else_value))
