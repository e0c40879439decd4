"""
Recipe records as published in cooking.json / alchemy.json.
"""
from dataclasses import dataclass, field
from typing import Optional, Tuple

from recipewatch.text import Number


@dataclass(frozen=True)
class Item:
    """A material or product referenced by a recipe."""
    id: str
    name: str
    grade: Number
    type: str
    icon: str
    amount: Number = 1

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "grade": self.grade,
            "type": self.type,
            "icon": self.icon,
            "amount": self.amount,
        }


@dataclass(frozen=True)
class Mastery:
    name: str
    level: Number

    def to_dict(self) -> dict:
        return {"name": self.name, "level": self.level}


@dataclass(frozen=True)
class Recipe:
    id: str
    name: str
    icon: str
    grade: Number
    process: str
    mastery: Optional[Mastery]
    exp: Number
    materials: Tuple[Item, ...] = field(default_factory=tuple)
    products: Tuple[Item, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not self.id:
            raise ValueError("recipe id must not be empty")

    def to_dict(self) -> dict:
        """Plain dict in the published layout; `mastery` is left out when unset."""
        out = {
            "id": self.id,
            "name": self.name,
            "icon": self.icon,
            "grade": self.grade,
            "process": self.process,
        }
        if self.mastery is not None:
            out["mastery"] = self.mastery.to_dict()
        out["exp"] = self.exp
        out["materials"] = [m.to_dict() for m in self.materials]
        out["products"] = [p.to_dict() for p in self.products]
        return out
