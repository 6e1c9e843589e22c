from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class StoreSection(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    emoji: str
    categories: tuple[str, ...]


class StoreLayout(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    name: str
    description: str
    category_order: tuple[str, ...]
    sections: tuple[StoreSection, ...]
    tips: tuple[str, ...] = ()


class LayoutOption(BaseModel):
    value: str
    label: str
    description: str


class AppliedLayout(BaseModel):
    items: dict[str, list[Any]]
    layout: StoreLayout
    sections: tuple[StoreSection, ...]
    tips: tuple[str, ...]


class RouteSection(BaseModel):
    section: str
    emoji: str
    categories: list[str]
    item_count: int
    items: list[Any]
    estimated_time: int
    food_safety_notes: str


class ShoppingRoute(BaseModel):
    route: list[RouteSection] = Field(default_factory=list)
    total_time: int = 0
    total_sections: int = 0
    store_name: str
    tips: tuple[str, ...] = ()
    food_safety_reminder: str


class TemperatureRequirement(BaseModel):
    model_config = ConfigDict(frozen=True)

    temp: str
    storage: str
    urgency: str
