"""Exceptions raised while parsing or evaluating a query."""


class QueryError(Exception):
    """Base class for every error raised by this package."""


class QuerySyntaxError(QueryError):
    """The query text could not be parsed."""


class EvaluationError(QueryError):
    """A parsed query could not be evaluated against an item."""