"""threeway — three-way comparison with bridged rich comparisons."""

from threeway.domain.comparable import (
    SupportsThreeWay,
    ThreeWayComparable,
    TwoWayOrdered,
    compare_via_two_way,
    derive_ordering,
    satisfies,
    three_way,
)
from threeway.domain.order import Order
from threeway.domain.pair import Pair, nest

__version__ = "0.1.0"

__all__ = [
    "Order",
    "Pair",
    "SupportsThreeWay",
    "ThreeWayComparable",
    "TwoWayOrdered",
    "__version__",
    "compare_via_two_way",
    "derive_ordering",
    "nest",
    "satisfies",
    "three_way",
]
