from pydantic import BaseModel, Field

from scuc_engine.network.network_model import Bus, BusType, TransmissionLine
from scuc_engine.system import HOURS_PER_DAY, GenType, Generator, SystemDefinition


class BusSchema(BaseModel):
    id: int
    name: str = Field(default="", max_length=255)
    bus_type: str = Field(default="PQ", pattern="^(Slack|PV|PQ)$")
    base_load: float = Field(default=0.0, ge=0)
    x: float = 0.0
    y: float = 0.0

    def to_engine(self) -> Bus:
        return Bus(
            id=self.id,
            name=self.name,
            bus_type=BusType(self.bus_type),
            base_load=self.base_load,
            x=self.x,
            y=self.y,
        )


class GeneratorSchema(BaseModel):
    id: str = Field(min_length=1, max_length=64)
    name: str = Field(default="", max_length=255)
    bus_id: int
    p_min: float = Field(ge=0)
    p_max: float = Field(gt=0)
    cost_a: float = 0.0
    cost_b: float
    cost_c: float = 0.0
    start_up_cost: float = Field(default=0.0, ge=0)
    gen_type: str = Field(default="Thermal", pattern="^(Thermal|Hydro|Renewable|Nuclear)$")

    def to_engine(self) -> Generator:
        return Generator(
            id=self.id,
            name=self.name,
            bus_id=self.bus_id,
            p_min=self.p_min,
            p_max=self.p_max,
            cost_a=self.cost_a,
            cost_b=self.cost_b,
            cost_c=self.cost_c,
            start_up_cost=self.start_up_cost,
            gen_type=GenType(self.gen_type),
        )


class LineSchema(BaseModel):
    id: str = Field(min_length=1, max_length=64)
    from_bus: int
    to_bus: int
    reactance: float = Field(gt=0)
    capacity: float = Field(gt=0)

    def to_engine(self) -> TransmissionLine:
        return TransmissionLine(
            id=self.id,
            from_bus=self.from_bus,
            to_bus=self.to_bus,
            reactance=self.reactance,
            capacity=self.capacity,
        )


class SystemDefinitionSchema(BaseModel):
    buses: list[BusSchema] = Field(min_length=1)
    generators: list[GeneratorSchema] = Field(default_factory=list)
    lines: list[LineSchema] = Field(default_factory=list)
    load_profile: list[float] = Field(
        min_length=HOURS_PER_DAY, max_length=HOURS_PER_DAY
    )

    def to_engine(self) -> SystemDefinition:
        return SystemDefinition(
            buses=tuple(b.to_engine() for b in self.buses),
            generators=tuple(g.to_engine() for g in self.generators),
            lines=tuple(ln.to_engine() for ln in self.lines),
            load_profile=tuple(self.load_profile),
        )

    @classmethod
    def from_engine(cls, system: SystemDefinition) -> "SystemDefinitionSchema":
        return cls(
            buses=[
                BusSchema(
                    id=b.id, name=b.name, bus_type=b.bus_type.value,
                    base_load=b.base_load, x=b.x, y=b.y,
                )
                for b in system.buses
            ],
            generators=[
                GeneratorSchema(
                    id=g.id, name=g.name, bus_id=g.bus_id, p_min=g.p_min,
                    p_max=g.p_max, cost_a=g.cost_a, cost_b=g.cost_b,
                    cost_c=g.cost_c, start_up_cost=g.start_up_cost,
                    gen_type=g.gen_type.value,
                )
                for g in system.generators
            ],
            lines=[
                LineSchema(
                    id=ln.id, from_bus=ln.from_bus, to_bus=ln.to_bus,
                    reactance=ln.reactance, capacity=ln.capacity,
                )
                for ln in system.lines
            ],
            load_profile=list(system.load_profile),
        )
