"""Category alias resolution.

Category labels are a controlled vocabulary, but the stored ``collection``
values drifted over several spreadsheet imports ("Batteries", "Battery",
"Laptop Battery", ...). The alias table maps each canonical label shown in
the storefront to every variant that has been seen in stored rows. Variants
are compared by exact membership, never normalized.
"""

from types import MappingProxyType
from typing import FrozenSet, Iterable, Mapping, Optional

from storefront.logging import get_logger

logger = get_logger(__name__, component="search")

DEFAULT_CATEGORY_ALIASES: Mapping[str, FrozenSet[str]] = MappingProxyType(
    {
        "Batteries": frozenset(
            {"Batteries", "Laptop Battery", "Battery", "Laptop Batteries"}
        ),
        "Adapters": frozenset(
            {"Adapters", "Adapter", "Laptop Adapter", "Power Adapter", "Charger"}
        ),
        "Docking Station": frozenset(
            {"Docking Station", "DockingStation", "Docking Stations", "Dock"}
        ),
        "Locks": frozenset({"Locks", "Lock", "Laptop Lock"}),
        "Headphones": frozenset({"Headphones", "Headphone", "Headset"}),
        "Mouse": frozenset({"Mouse", "Mice"}),
        "Screens": frozenset({"Screens", "Screen", "Laptop Screen", "LCD Screen"}),
        "Privacy Filters": frozenset(
            {"Privacy Filters", "Privacy Filter", "PrivacyFilter"}
        ),
        "Stands": frozenset({"Stands", "Stand", "Laptop Stand"}),
        "Bags": frozenset({"Bags", "Bag", "Laptop Bag"}),
        "Webcams": frozenset({"Webcams", "Webcam"}),
        "Cables": frozenset({"Cables", "Cable"}),
    }
)


def build_alias_table(raw: Mapping[str, Iterable[str]]) -> Mapping[str, FrozenSet[str]]:
    """Freeze a label -> variants mapping, adding each label to its own variants.

    Blank variants are dropped. The result is read-only.
    """
    table = {}
    for label, variants in raw.items():
        cleaned = {variant for variant in variants if isinstance(variant, str) and variant.strip()}
        cleaned.add(label)
        table[label] = frozenset(cleaned)
    return MappingProxyType(table)


class CategoryAliasResolver:
    """Expands canonical category labels into their stored variants."""

    def __init__(self, table: Optional[Mapping[str, Iterable[str]]] = None):
        self.table = build_alias_table(
            DEFAULT_CATEGORY_ALIASES if table is None else table
        )

    def resolve(self, label: str) -> FrozenSet[str]:
        """Return every stored variant of ``label``.

        Unknown labels resolve to ``{label}``. The result is never empty.
        """
        variants = self.table.get(label)
        if variants is None:
            logger.debug(
                "Category has no aliases, using label as its only variant",
                extra={"event": "search.category.unmapped", "category": str(label)},
            )
            return frozenset({label})

        return variants

    def labels(self) -> FrozenSet[str]:
        """Canonical labels known to the table."""
        return frozenset(self.table)


_default_resolver = CategoryAliasResolver()


def resolve_aliases(label: str) -> FrozenSet[str]:
    """Resolve ``label`` against the built-in alias table."""
    return _default_resolver.resolve(label)
