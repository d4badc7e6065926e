"""Per-unit conversions on the 100 MVA system base.

All DC power-flow quantities are solved in per-unit and scaled back to MW
for reporting:

  P_pu = P_MW / S_base
  P_MW = P_pu × S_base
"""

from __future__ import annotations

BASE_MVA: float = 100.0


def mw_to_pu(p_mw: float, s_base_mva: float = BASE_MVA) -> float:
    """Convert active power in MW to per-unit."""
    return p_mw / s_base_mva


def pu_to_mw(p_pu: float, s_base_mva: float = BASE_MVA) -> float:
    """Convert per-unit active power back to MW."""
    return p_pu * s_base_mva
