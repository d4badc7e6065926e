from pydantic import BaseModel


class HourlyResultResponse(BaseModel):
    hour: int
    total_load: float
    gen_status: dict[str, bool]
    gen_output: dict[str, float]
    line_flows: dict[str, float]
    line_loading: dict[str, float]
    system_cost: float
    lmp: dict[int, float]  # bus id -> $/MWh
    alerts: list[str]
    bus_angles: dict[int, float]
    angle_solution_status: str  # "solved" or "zero_fallback"
    unserved_load: float


class DailySummaryResponse(BaseModel):
    total_cost: float
    peak_load: float
    peak_hour: int
    max_line_loading_pct: float
    max_loading_line: str | None = None
    congested_hours: int
    fallback_hours: int
    unserved_energy_mwh: float
    average_price: float


class SimulationResponse(BaseModel):
    hours: list[HourlyResultResponse]
    summary: DailySummaryResponse
