from .http_method import HttpMethod as HttpMethod
from .query_type import QueryType as QueryType
from .sort_direction import SortDirection as SortDirection
