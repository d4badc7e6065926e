"""Network topology model and susceptance (B) matrix construction.

Builds the nodal susceptance matrix used by the DC power flow from bus and
line data, and its reduced form with the slack bus row/column removed.
Topology is static across a simulation run, so the model is built once per
run and shared read-only by every hour.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

import numpy as np
from numpy.typing import NDArray

SLACK_INDEX: int = 0


class BusType(str, Enum):
    SLACK = "Slack"
    PV = "PV"
    PQ = "PQ"


@dataclass(frozen=True)
class Bus:
    """Single bus definition.

    ``bus_type`` is informational: the bus at position 0 of the bus list is
    always the reference (slack) bus. ``x``/``y`` are layout coordinates for
    map rendering and are not used by the engine.
    """
    id: int
    name: str = ""
    bus_type: BusType = BusType.PQ
    base_load: float = 0.0  # MW
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class TransmissionLine:
    """Transmission line between two buses (undirected for the B matrix)."""
    id: str
    from_bus: int  # bus id
    to_bus: int    # bus id
    reactance: float  # p.u.
    capacity: float   # MW thermal rating


@dataclass(frozen=True, eq=False)
class NetworkModel:
    """Static susceptance model for one simulation run."""
    bus_ids: tuple[int, ...]
    susceptance: NDArray[np.float64]
    reduced_susceptance: NDArray[np.float64]
    slack_index: int = SLACK_INDEX
    bus_index: dict[int, int] = field(default_factory=dict)

    @property
    def n_bus(self) -> int:
        return len(self.bus_ids)

    @property
    def slack_bus_id(self) -> int:
        return self.bus_ids[self.slack_index]

    @property
    def non_slack(self) -> list[int]:
        """Matrix indices of every bus except the slack, in bus order."""
        return [i for i in range(self.n_bus) if i != self.slack_index]

    def index_of(self, bus_id: int) -> int:
        return self.bus_index[bus_id]


def bus_index_map(buses: Sequence[Bus]) -> dict[int, int]:
    """Map bus id → matrix index (position in the bus sequence)."""
    return {bus.id: i for i, bus in enumerate(buses)}


def build_susceptance_matrix(
    buses: Sequence[Bus],
    lines: Sequence[TransmissionLine],
) -> NDArray[np.float64]:
    """Construct the N×N nodal susceptance matrix.

    For each line with reactance x between buses i and j:
    - B_ii += 1/x
    - B_jj += 1/x
    - B_ij -= 1/x
    - B_ji -= 1/x

    Reactance is not validated. A zero reactance yields ``inf`` entries
    (and ``nan`` where infinities cancel) instead of raising.
    """
    index = bus_index_map(buses)
    n = len(buses)
    B = np.zeros((n, n), dtype=np.float64)

    with np.errstate(divide="ignore", invalid="ignore"):
        for line in lines:
            i = index[line.from_bus]
            j = index[line.to_bus]
            b = np.divide(1.0, np.float64(line.reactance))

            B[i, i] += b
            B[j, j] += b
            B[i, j] -= b
            B[j, i] -= b

    return B


def reduce_susceptance_matrix(
    B: NDArray[np.float64],
    slack_index: int = SLACK_INDEX,
) -> NDArray[np.float64]:
    """Remove the slack bus row and column, giving an (N-1)×(N-1) matrix."""
    reduced = np.delete(B, slack_index, axis=0)
    return np.delete(reduced, slack_index, axis=1)


def build_network_model(
    buses: Sequence[Bus],
    lines: Sequence[TransmissionLine],
) -> NetworkModel:
    """Build the full and reduced B matrices for a run.

    The returned arrays are flagged read-only so that no hourly computation
    can alter the shared model. A new model must be built for every run.
    """
    B = build_susceptance_matrix(buses, lines)
    B_reduced = reduce_susceptance_matrix(B, SLACK_INDEX) if len(buses) else B
    B.flags.writeable = False
    B_reduced.flags.writeable = False

    return NetworkModel(
        bus_ids=tuple(bus.id for bus in buses),
        susceptance=B,
        reduced_susceptance=B_reduced,
        slack_index=SLACK_INDEX,
        bus_index=bus_index_map(buses),
    )
