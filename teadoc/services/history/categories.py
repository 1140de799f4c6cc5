"""
Static per-category configuration for the detection history views.

Each disease category has a fixed, ordered list of selectable labels.
Any category missing from the table falls back to DEFAULT_FEATURES.
"""
from dataclasses import dataclass
from typing import Dict, List, Tuple

DEFAULT_FEATURES: Tuple[str, ...] = ("healthy",)


@dataclass(frozen=True)
class CategoryConfig:
    name: str
    features: Tuple[str, ...] = DEFAULT_FEATURES

    @property
    def slug(self) -> str:
        """Default history identifier used by the UI for this category."""
        return self.name.lower().replace(" ", "-")


CATEGORIES: Dict[str, CategoryConfig] = {
    c.name: c
    for c in (
        CategoryConfig("Blister Blight", ("healthy", "blister_blight")),
        CategoryConfig("Stem and Branch", ("healthy", "bark_cancer", "leaf_cancer")),
        CategoryConfig("Insect"),
    )
}


def feature_list(category) -> List[str]:
    """Selectable labels for a category. Total: unknown input gets ["healthy"]."""
    config = CATEGORIES.get(category) if isinstance(category, str) else None
    return list(config.features if config else DEFAULT_FEATURES)


def is_known_category(category) -> bool:
    return isinstance(category, str) and category in CATEGORIES
