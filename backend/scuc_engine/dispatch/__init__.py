"""Hourly unit commitment and economic dispatch.

* **unit_commitment** -- priority-list commitment with a capacity reserve.
* **economic_dispatch** -- merit-order fill and marginal price estimate.
"""

from .unit_commitment import commit_units, commitment_order
from .economic_dispatch import DispatchResult, dispatch_merit_order, marginal_price

__all__ = [
    "commit_units",
    "commitment_order",
    "DispatchResult",
    "dispatch_merit_order",
    "marginal_price",
]
