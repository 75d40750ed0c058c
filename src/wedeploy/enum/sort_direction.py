from enum import StrEnum


class SortDirection(StrEnum):
    """Sort directions understood by the data service."""

    ASC = "asc"
    DESC = "desc"
