"""Allergen catalogue and diet-implied allergen rules.

A diet implies a fixed set of allergens to avoid (vegan implies eggs, dairy,
fish and shellfish). The allergen list sent to generation is always the
union of the implied set and the user's own picks, and an implied allergen
cannot be unchecked while its diet is active.
"""

from typing import Iterable, Optional


ALLERGENS: tuple[str, ...] = (
    "gluten",
    "dairy",
    "eggs",
    "soy",
    "peanuts",
    "tree nuts",
    "fish",
    "shellfish",
    "sesame",
    "mustard",
    "celery",
)

# Keyed by canonical diet value
DIET_IMPLIED_ALLERGENS: dict[str, tuple[str, ...]] = {
    "vegan": ("eggs", "dairy", "fish", "shellfish"),
    "vegetarian": ("fish", "shellfish"),
    "gluten-free": ("gluten",),
}


def normalize_allergen(name: str) -> str:
    """Canonical spelling of an allergen tag (trimmed, lower-case)."""
    return " ".join(str(name).split()).lower()


def implied_allergens(diet: Optional[str]) -> tuple[str, ...]:
    """Allergens a diet forces on, in catalogue order. Unknown diets imply nothing."""
    if not diet:
        return ()
    return DIET_IMPLIED_ALLERGENS.get(str(getattr(diet, "value", diet)), ())


def merge_allergies(diet: Optional[str], manual: Iterable[str]) -> list[str]:
    """Ordered, deduplicated union: diet-implied allergens first, then manual picks.

    Args:
        diet: Canonical diet value (or Diet enum member).
        manual: User-chosen allergen tags, any spelling.

    Returns:
        List without duplicates and without empty tags.
    """
    merged: list[str] = []
    for name in (*implied_allergens(diet), *manual):
        tag = normalize_allergen(name)
        if tag and tag not in merged:
            merged.append(tag)
    return merged


class AllergenSelection:
    """Allergy filter state coupled to the active diet.

    Manual picks and diet-implied allergens are tracked separately, so that
    switching diets adds or drops only the implied ones.
    """

    def __init__(self, diet: Optional[str] = None, manual: Iterable[str] = ()) -> None:
        self.diet = diet
        self.manual: list[str] = merge_allergies(None, manual)

    @property
    def implied(self) -> tuple[str, ...]:
        return implied_allergens(self.diet)

    @property
    def effective(self) -> list[str]:
        return merge_allergies(self.diet, self.manual)

    def is_locked(self, allergen: str) -> bool:
        """True when the allergen is forced on by the active diet."""
        return normalize_allergen(allergen) in self.implied

    def toggle(self, allergen: str) -> bool:
        """Flip a manual pick. Locked allergens stay on.

        Returns:
            Whether the allergen is active afterwards.
        """
        tag = normalize_allergen(allergen)
        if self.is_locked(tag):
            return True
        if tag in self.manual:
            self.manual.remove(tag)
            return False
        self.manual.append(tag)
        return True

    def set_diet(self, diet: Optional[str]) -> None:
        self.diet = diet

    def reset(self) -> None:
        self.diet = None
        self.manual = []
