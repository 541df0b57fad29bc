"""Prompts for recipe generation.

Builds the system instruction and the per-request user instruction from
RecipePreferences. Everything here is pure: the same preferences always give
the same text, byte for byte.
"""

from dataclasses import dataclass

from src.models.models import Diet, Mode, RecipePreferences, Tab


# Dishes that need many components, long rests or multi-day prep
COMPLEX_DISH_HINTS: tuple[str, ...] = (
    "beef wellington",
    "wellington",
    "biryani",
    "ramen",
    "pho",
    "mole",
    "coq au vin",
    "cassoulet",
    "paella",
    "sourdough",
    "sauerteig",
    "cannoli",
    "croissant",
    "pastéis de nata",
    "pasteis de nata",
    "bibimbap",
    "peking duck",
    "pekingente",
    "duck à l'orange",
    "tamales",
    "barbacoa",
    "osso buco",
)

RECIPE_SCHEMA = """{
  "title": string,
  "cuisine": string,
  "servings": number,
  "time": number,
  "ingredients": string[] | {"amount": number | string, "unit": string, "item": string, "note": string}[],
  "authentic": string[],
  "steps": string[],
  "allergyNote": string | null
}"""

COMPLEX_DIRECTIVE = (
    "Provide 20-40 precise steps with exact times, temperatures and resting periods, "
    "keeping components separate (e.g. dough/filling/sauce). "
    "Also include professional tips, common pitfalls and plating notes."
)
SIMPLE_DIRECTIVE = "Give a short, correct recipe with only the essential steps (no unnecessary detail)."
DEFAULT_DIRECTIVE = "Give 8-16 clear, precise steps."
MEALPREP_DIRECTIVE = (
    "Optimize for meal prep: it should keep for 3-4 days; include storage and reheating instructions."
)
FORMAT_DIRECTIVE = "Respond ONLY with pure JSON (no Markdown, no explanations)."
AUTHENTIC_DIRECTIVE = "In 'authentic' list only items that are actually used in the recipe."
CUISINE_DIRECTIVE = "Never set 'cuisine' to 'Fusion' when a clear cuisine is recognizable or was chosen."


@dataclass(frozen=True)
class GenerationPrompt:
    """User instruction plus the complexity classification it was built with."""

    text: str
    is_complex: bool


def get_system_instructions() -> str:
    """Fixed system instruction for every generation call."""
    return (
        "You are a world-class chef and food editor. "
        "Respond only with valid JSON that matches the requested schema."
    )


def is_complex_dish(preferences: RecipePreferences) -> bool:
    """Traditional mode, or a query naming a known labor-intensive dish."""
    if preferences.mode == Mode.TRADITIONAL:
        return True
    query = (preferences.query or "").lower()
    return any(hint in query for hint in COMPLEX_DISH_HINTS)


def _detail_directive(preferences: RecipePreferences, is_complex: bool) -> str:
    if is_complex:
        return COMPLEX_DIRECTIVE
    if preferences.mode == Mode.SIMPLE:
        return SIMPLE_DIRECTIVE
    return DEFAULT_DIRECTIVE


def build_directives(preferences: RecipePreferences, is_complex: bool) -> str:
    """Conditional hints appended to every user instruction, space-joined."""
    hints = [
        _detail_directive(preferences, is_complex),
        MEALPREP_DIRECTIVE if preferences.mode == Mode.MEALPREP else None,
        f"Respect the diet: {preferences.diet.value}." if preferences.diet != Diet.NONE else None,
        f"Avoid these allergens: {', '.join(preferences.allergies)}." if preferences.allergies else None,
        FORMAT_DIRECTIVE,
        f"Schema: {RECIPE_SCHEMA}",
        AUTHENTIC_DIRECTIVE,
        CUISINE_DIRECTIVE,
    ]
    return " ".join(hint for hint in hints if hint)


def build_generation_prompt(preferences: RecipePreferences) -> GenerationPrompt:
    """User instruction for one request.

    Search requests with a query name the dish. Everything else describes
    the pantry, the extra ingredients, the cuisine and the serving count.
    """
    is_complex = is_complex_dish(preferences)
    directives = build_directives(preferences, is_complex)

    if preferences.tab == Tab.SEARCH and preferences.query:
        text = f'Create a recipe for: "{preferences.query}". {directives}'
    else:
        pantry = ", ".join(preferences.available_pantry_items) or "(empty)"
        cuisine = preferences.pinned_cuisine or "(choose automatically)"
        text = (
            "Create a recipe from the household pantry and the preferences below.\n"
            f"Pantry: {pantry}.\n"
            f"Extra ingredients: {preferences.extra or '(none)'}.\n"
            f"Cuisine: {cuisine}.\n"
            f"Servings: {preferences.servings}.\n"
            f"{directives}"
        )

    return GenerationPrompt(text=text, is_complex=is_complex)
