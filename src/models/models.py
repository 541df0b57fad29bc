"""Data models and schemas for the Pantry Chef recipe service.

Defines Pydantic models for request/response validation and domain objects.
All models use Pydantic v2 for strict validation and OpenAPI schema generation.

Enumerations carry one canonical English value each. Labels sent by the older
German-language UI ("einfach", "vegetarisch", "suche", ...) are mapped onto
the canonical values at the boundary, so only one schema is live.
"""

from enum import Enum
from typing import Annotated, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from src.models.allergens import AllergenSelection


AUTO_CUISINE = "auto"
DEFAULT_SERVINGS = 2


class Mode(str, Enum):
    """Cooking mode."""

    AUTO = "auto"
    SIMPLE = "simple"
    TRADITIONAL = "traditional"
    MEALPREP = "mealprep"


class Diet(str, Enum):
    """Dietary constraint. NONE means no constraint."""

    NONE = "none"
    VEGETARIAN = "vegetarian"
    VEGAN = "vegan"
    GLUTEN_FREE = "gluten-free"
    HIGH_PROTEIN = "high-protein"
    LOW_CALORIE = "low-calorie"
    CARNIVORE = "carnivore"


class Tab(str, Enum):
    """Where the request came from: pantry-driven generator or free-text search."""

    GENERATOR = "generator"
    SEARCH = "search"


MODE_ALIASES = {
    "automatic": Mode.AUTO,
    "einfach": Mode.SIMPLE,
    "traditionell": Mode.TRADITIONAL,
    "meal-prep": Mode.MEALPREP,
    "meal_prep": Mode.MEALPREP,
    "vorkochen": Mode.MEALPREP,
}

DIET_ALIASES = {
    "auto": Diet.NONE,
    "keine vorgabe": Diet.NONE,
    "vegetarisch": Diet.VEGETARIAN,
    "glutenfrei": Diet.GLUTEN_FREE,
    "proteinreich": Diet.HIGH_PROTEIN,
    "kalorienarm": Diet.LOW_CALORIE,
    "carnivor": Diet.CARNIVORE,
}

TAB_ALIASES = {
    "suche": Tab.SEARCH,
    "query": Tab.SEARCH,
    "pantry": Tab.GENERATOR,
}


def _resolve_alias(value, aliases: dict, default):
    """Map legacy labels onto canonical enum values; leave the rest to pydantic."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    if isinstance(value, str):
        key = value.strip().lower()
        return aliases.get(key, key)
    return value


class RecipePreferences(BaseModel):
    """Everything the user chose for one generate/search action.

    Built fresh per request and never persisted. After validation `allergies`
    already holds the union of diet-implied and user-chosen allergens.
    """

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    mode: Annotated[Mode, Field(description="Cooking mode")] = Mode.AUTO
    servings: Annotated[int, Field(ge=1, le=100, description="Target serving count (1-100)")] = DEFAULT_SERVINGS
    diet: Annotated[Diet, Field(description="Diet constraint")] = Diet.NONE
    allergies: Annotated[
        List[str],
        Field(default_factory=list, description="Allergens to avoid (diet-implied ones are added)"),
    ]
    cuisine: Annotated[str, Field(max_length=100, description="Cuisine name or 'auto'")] = AUTO_CUISINE
    extra: Annotated[str, Field(max_length=1000, description="Comma-separated extra ingredients")] = ""
    pantry: Annotated[
        dict[str, bool], Field(default_factory=dict, description="Pantry item -> available")
    ]
    query: Annotated[str, Field(max_length=500, description="Dish to search for")] = ""
    tab: Annotated[Tab, Field(description="generator or search")] = Tab.GENERATOR

    @field_validator("mode", mode="before")
    @classmethod
    def resolve_mode(cls, value):
        return _resolve_alias(value, MODE_ALIASES, Mode.AUTO)

    @field_validator("diet", mode="before")
    @classmethod
    def resolve_diet(cls, value):
        return _resolve_alias(value, DIET_ALIASES, Diet.NONE)

    @field_validator("tab", mode="before")
    @classmethod
    def resolve_tab(cls, value):
        return _resolve_alias(value, TAB_ALIASES, Tab.GENERATOR)

    @field_validator("cuisine", mode="before")
    @classmethod
    def resolve_cuisine(cls, value):
        if value is None:
            return AUTO_CUISINE
        text = str(value).strip()
        if not text or text.lower() in ("auto", "automatic"):
            return AUTO_CUISINE
        return text

    @field_validator("extra", "query", mode="before")
    @classmethod
    def none_to_empty(cls, value):
        return "" if value is None else value

    @field_validator("pantry", mode="before")
    @classmethod
    def none_to_empty_map(cls, value):
        return {} if value is None else value

    @field_validator("allergies", mode="before")
    @classmethod
    def none_to_empty_list(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            return [part for part in value.split(",")]
        return value

    @field_validator("allergies", mode="after")
    @classmethod
    def add_diet_allergens(cls, value: list[str], info: ValidationInfo) -> list[str]:
        """Union with the allergens implied by the (already validated) diet."""
        return AllergenSelection(info.data.get("diet"), value).effective

    @property
    def pinned_cuisine(self) -> Optional[str]:
        """The requested cuisine, or None when the generator may choose."""
        return None if self.cuisine == AUTO_CUISINE else self.cuisine

    @property
    def available_pantry_items(self) -> list[str]:
        return [item for item, available in self.pantry.items() if available]


class RecipeIngredient(BaseModel):
    """Structured ingredient line. Unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore")

    amount: Annotated[Optional[Union[int, float, str]], Field(description="Quantity")] = None
    unit: Annotated[Optional[str], Field(description="Unit, e.g. g, cup, tbsp")] = None
    item: Annotated[Optional[str], Field(description="Ingredient name")] = None
    note: Annotated[Optional[str], Field(description="Preparation note")] = None


Ingredient = Union[str, RecipeIngredient]


class Recipe(BaseModel):
    """Canonical recipe returned to the UI."""

    model_config = ConfigDict(populate_by_name=True)

    title: Annotated[str, Field(min_length=1, description="Recipe title")]
    cuisine: Annotated[str, Field(min_length=1, description="Cuisine label")]
    servings: Annotated[int, Field(ge=1, description="Serving count")]
    time: Annotated[int, Field(ge=1, description="Total time in minutes")]
    ingredients: Annotated[List[Ingredient], Field(default_factory=list)]
    authentic: Annotated[
        List[str], Field(default_factory=list, description="Authentic/optional ingredient notes")
    ]
    steps: Annotated[List[str], Field(default_factory=list)]
    allergy_note: Annotated[Optional[str], Field(alias="allergyNote", description="Allergen warning")] = None


class ErrorResponse(BaseModel):
    """Body returned with a failure status."""

    error: str


class ShareLinkRequest(BaseModel):
    """Selection to turn into a share link (id list or boolean map)."""

    selection: Annotated[Union[List[str], dict[str, bool]], Field(default_factory=list)]
    origin: Annotated[Optional[str], Field(description="Origin to embed, e.g. https://example.org")] = None


class ShareLinkResponse(BaseModel):
    url: str
    token: str


class ShareImportRequest(BaseModel):
    """A bare token, a legacy payload, or a full URL carrying either."""

    input: Annotated[str, Field(max_length=20000)] = ""


class ShareImportResponse(BaseModel):
    selection: List[str]
    url: Annotated[Optional[str], Field(description="The input link without share parameters")] = None
