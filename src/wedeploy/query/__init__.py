from .protocols import Embodied as Embodied, to_body as to_body, to_json as to_json
from .range import Range as Range
from .bucket_order import BucketOrder as BucketOrder
from .aggregation import (
    Aggregation as Aggregation,
    DistanceAggregation as DistanceAggregation,
    RangeAggregation as RangeAggregation,
    TermsAggregation as TermsAggregation,
)
from .filter import Filter as Filter, UNSET as UNSET
from .builders import Query as Query
from . import geo as geo
