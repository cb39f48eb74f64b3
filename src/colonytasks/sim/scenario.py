"""Scenario files describing a starting room.

A scenario is a JSON document validated with pydantic. Kinds and body
parts are written in lowercase (``"extension"``, ``"work"``).

Example:
    {
      "size": 50,
      "structures": [{"kind": "spawn", "pos": [25, 25], "energy": 300}],
      "nodes": [{"pos": [10, 10]}],
      "agents": [{"name": "h1", "pos": [24, 25], "body": ["move", "work"]}]
    }
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError

from colonytasks.core.identity import ROOM_SIZE, Position
from colonytasks.core.kinds import Capability, StructureKind
from colonytasks.errors import ScenarioError
from colonytasks.sim.room import SimRoom


def _enum_by_name(enum_type: Any) -> BeforeValidator:
    def parse(value: Any) -> Any:
        if isinstance(value, enum_type):
            return value
        if isinstance(value, str) and value.upper() in enum_type.__members__:
            return enum_type[value.upper()]
        choices = ", ".join(name.lower() for name in enum_type.__members__)
        raise ValueError(f"unknown {enum_type.__name__} {value!r}, expected one of: {choices}")

    return BeforeValidator(parse)


def _coordinate(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"position coordinates must be integers, got {value!r}")
    return value


def _position(value: Any) -> Any:
    if isinstance(value, Position):
        return value
    if isinstance(value, (list, tuple)) and len(value) == 2:
        return Position(_coordinate(value[0]), _coordinate(value[1]))
    if isinstance(value, dict) and set(value) == {"x", "y"}:
        return Position(_coordinate(value["x"]), _coordinate(value["y"]))
    raise ValueError(f"position must be [x, y] or {{x, y}}, got {value!r}")


KindField = Annotated[StructureKind, _enum_by_name(StructureKind)]
PartField = Annotated[Capability, _enum_by_name(Capability)]
PosField = Annotated[Position, BeforeValidator(_position)]


class _Strict(BaseModel):
    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)


class AgentSpec(_Strict):
    name: str = Field(min_length=1)
    pos: PosField
    body: list[PartField] = Field(min_length=1)
    energy: int = Field(default=0, ge=0)
    hits: int | None = Field(default=None, gt=0)


class StructureSpec(_Strict):
    kind: KindField
    pos: PosField
    hits: int | None = Field(default=None, ge=0)
    hits_max: int | None = Field(default=None, ge=0)
    energy: int | None = Field(default=None, ge=0)
    energy_capacity: int | None = Field(default=None, ge=0)
    owned: bool | None = None


class SiteSpec(_Strict):
    kind: KindField
    pos: PosField
    progress: int = Field(default=0, ge=0)
    progress_total: int | None = Field(default=None, gt=0)


class NodeSpec(_Strict):
    pos: PosField
    energy: int = Field(default=3000, ge=0)
    energy_capacity: int = Field(default=3000, gt=0)


class PileSpec(_Strict):
    pos: PosField
    amount: int = Field(gt=0)


class HostileSpec(_Strict):
    pos: PosField
    hits: int = Field(default=100, gt=0)


class Scenario(_Strict):
    """Complete description of a room at tick ``tick``."""

    size: int = Field(default=ROOM_SIZE, gt=0)
    tick: int = Field(default=0, ge=0)
    regen_interval: int = Field(default=300, gt=0)
    structures: list[StructureSpec] = Field(default_factory=list)
    sites: list[SiteSpec] = Field(default_factory=list)
    nodes: list[NodeSpec] = Field(default_factory=list)
    piles: list[PileSpec] = Field(default_factory=list)
    hostiles: list[HostileSpec] = Field(default_factory=list)
    agents: list[AgentSpec] = Field(default_factory=list)

    def build(self) -> SimRoom:
        """Create a fresh SimRoom populated from this scenario.

        Raises:
            ScenarioError: If an object does not fit in the room.
        """
        room = SimRoom(size=self.size, tick=self.tick, regen_interval=self.regen_interval)
        try:
            for s in self.structures:
                room.add_structure(
                    s.kind,
                    s.pos,
                    hits=s.hits,
                    hits_max=s.hits_max,
                    energy=s.energy,
                    energy_capacity=s.energy_capacity,
                    owned=s.owned,
                )
            for site in self.sites:
                room.add_site(site.kind, site.pos, site.progress, site.progress_total)
            for node in self.nodes:
                room.add_node(node.pos, node.energy, node.energy_capacity)
            for pile in self.piles:
                room.add_pile(pile.pos, pile.amount)
            for hostile in self.hostiles:
                room.add_hostile(hostile.pos, hostile.hits)
            for a in self.agents:
                room.add_agent(a.name, a.pos, a.body, energy=a.energy, hits=a.hits)
        except ValueError as e:
            raise ScenarioError(str(e)) from e
        return room


def parse_scenario(text: str) -> Scenario:
    """Validate scenario JSON text.

    Raises:
        ScenarioError: If the text is not a valid scenario.
    """
    try:
        return Scenario.model_validate_json(text)
    except ValidationError as e:
        raise ScenarioError(f"Invalid scenario: {e}") from e


def load_scenario(path: str | Path) -> SimRoom:
    """Read a scenario file and build the room it describes.

    Raises:
        ScenarioError: If the file is missing or invalid.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ScenarioError(f"Cannot read scenario {path}: {e}") from e
    return parse_scenario(text).build()
