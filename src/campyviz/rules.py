"""Ordered keyword rule tables used to normalize free-text spreadsheet cells."""

from __future__ import annotations

from dataclasses import dataclass

from campyviz.config import UNKNOWN_HOST


@dataclass(frozen=True)
class KeywordRule:
    """Map a value to ``label`` when any keyword occurs in it (case-insensitive)."""

    keywords: tuple[str, ...]
    label: str

    def matches(self, lowered: str) -> bool:
        return any(keyword in lowered for keyword in self.keywords)


@dataclass(frozen=True)
class RuleTable:
    """First-match-wins sequence of keyword rules.

    Rules are evaluated in declaration order, so a value matching several rules
    always resolves to the earliest one. ``default`` is returned when nothing
    matches; ``None`` means "keep the input value".
    """

    rules: tuple[KeywordRule, ...]
    default: str | None = None

    def resolve(self, value: str) -> str:
        lowered = value.lower().strip()
        for rule in self.rules:
            if rule.matches(lowered):
                return rule.label
        return value if self.default is None else self.default

    @property
    def labels(self) -> tuple[str, ...]:
        """Rule labels in precedence order, followed by the default label."""

        ordered = tuple(rule.label for rule in self.rules)
        if self.default is not None and self.default not in ordered:
            ordered += (self.default,)
        return ordered


SPECIES_RULES = RuleTable(
    rules=(
        KeywordRule(("jejuni",), "jejuni"),
        KeywordRule(("coli",), "coli"),
    ),
)

HOST_RULES = RuleTable(
    rules=(
        KeywordRule(("poultry", "chicken"), "Poultry"),
        KeywordRule(("cattle", "cow", "beef"), "Cattle"),
        KeywordRule(("swine", "pig"), "Swine"),
        KeywordRule(("human",), "Human"),
        KeywordRule(("multiple", "mixed"), "Multiple"),
    ),
)

PROCESS_RULES = RuleTable(
    rules=(
        KeywordRule(("adhesion", "adhere"), "adhesion"),
        KeywordRule(("invasion", "invade"), "invasion"),
        KeywordRule(("flagella", "fla", "motility", "mobility"), "mobility"),
        KeywordRule(("toxin", "cdt"), "toxin"),
        KeywordRule(("colonization",), "colonization"),
        KeywordRule(("survival",), "survival"),
    ),
    default="other",
)

# Chart-facing categories; toxin is checked before motility here, unlike
# PROCESS_RULES.
FUNCTION_CATEGORY_RULES = RuleTable(
    rules=(
        KeywordRule(("adhesion", "adhere"), "Adhesion"),
        KeywordRule(("invasion", "invade"), "Invasion"),
        KeywordRule(("toxin", "cdt"), "Toxin"),
        KeywordRule(("flagella", "fla", "motility", "mobility"), "Motility"),
        KeywordRule(("iron", "fe"), "Iron uptake"),
        KeywordRule(("stress", "response", "survival"), "Stress response"),
    ),
    default="Other",
)

PROCESS_CATEGORIES: tuple[str, ...] = PROCESS_RULES.labels
FUNCTION_CATEGORIES: tuple[str, ...] = FUNCTION_CATEGORY_RULES.labels

SPECIES_DISPLAY_LABELS: dict[str, str] = {
    "jejuni": "C. jejuni",
    "coli": "C. coli",
    "other": "Other",
}


def normalize_species(token: str) -> str:
    """Collapse a species token to ``jejuni``/``coli`` or keep it verbatim."""

    return SPECIES_RULES.resolve(token)


def normalize_host(token: str) -> str:
    """Map a host token onto a canonical host label.

    Unmatched tokens keep their trimmed text; blank tokens become ``Unknown``.
    """

    cleaned = token.strip()
    if not cleaned:
        return UNKNOWN_HOST
    return HOST_RULES.resolve(cleaned)


def categorize_process(function_text: str) -> str:
    return PROCESS_RULES.resolve(function_text)


def categorize_function(function_text: str) -> str:
    return FUNCTION_CATEGORY_RULES.resolve(function_text)


def primary_species(species: list[str] | tuple[str, ...]) -> str:
    """Pick the isolate species: jejuni wins over coli, anything else is ``other``."""

    if "jejuni" in species:
        return "jejuni"
    if "coli" in species:
        return "coli"
    return "other"
