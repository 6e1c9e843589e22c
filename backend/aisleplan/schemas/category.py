from pydantic import BaseModel, ConfigDict, Field


class GroceryCategory(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    name: str
    icon: str = "📦"
    color: str = "#6b7280"
    section: str = "Other"
    items: tuple[str, ...] = ()
    custom: bool = False


class CategorySuggestion(BaseModel):
    category: str
    confidence: float = Field(ge=0.0, le=1.0)
    is_valid_category: bool


class CategorySuggestRequest(BaseModel):
    name: str


class CategorySuggestResponse(CategorySuggestion):
    normalized: str
    core: str
    rule: str | None = None
