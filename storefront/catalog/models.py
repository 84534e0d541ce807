"""Display models for catalog pages."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from storefront.domain.models import IN_STOCK_SENTINEL, MAX_ADDITIONAL_INFO, MAX_PRODUCT_OPTIONS
from storefront.search.models import CatalogRecord


@dataclass(frozen=True)
class ProductOption:
    name: Optional[str]
    type: Optional[str]
    description: Optional[str]


@dataclass(frozen=True)
class InfoSection:
    title: str
    description: str


def inventory_status(inventory: Any) -> str:
    """Stock text for the detail page: sentinel, raw count, or "N/A".

    Zero stock reads "N/A", the same as an empty cell.
    """
    if inventory is None or inventory == "" or inventory == 0:
        return "N/A"
    if inventory == IN_STOCK_SENTINEL:
        return "High/In Stock"
    return str(inventory)


def _present(value: Any) -> bool:
    return value is not None and str(value).strip() != ""


@dataclass
class ProductDetail:
    """A product record with the derived values the detail page shows."""

    record: CatalogRecord
    options: List[ProductOption] = field(default_factory=list)
    additional_info: List[InfoSection] = field(default_factory=list)

    @classmethod
    def from_record(cls, record: CatalogRecord) -> "ProductDetail":
        options = []
        for n in range(1, MAX_PRODUCT_OPTIONS + 1):
            option = ProductOption(
                name=record.get(f"productOptionName{n}"),
                type=record.get(f"productOptionType{n}"),
                description=record.get(f"productOptionDescription{n}"),
            )
            if any(_present(value) for value in (option.name, option.type, option.description)):
                options.append(option)

        sections = []
        for n in range(1, MAX_ADDITIONAL_INFO + 1):
            title = record.get(f"additionalInfoTitle{n}")
            description = record.get(f"additionalInfoDescription{n}")
            if _present(title) or _present(description):
                sections.append(
                    InfoSection(
                        title=title if _present(title) else f"Section {n}",
                        description=description if _present(description) else "No description.",
                    )
                )

        return cls(record=dict(record), options=options, additional_info=sections)

    @property
    def id(self) -> Optional[int]:
        return self.record.get("id")

    @property
    def name(self) -> str:
        return self.record.get("name") or ""

    @property
    def inventory_status(self) -> str:
        return inventory_status(self.record.get("inventory"))

    @property
    def visible_label(self) -> str:
        return "Yes" if self.record.get("visible") else "No"

    def specifications(self) -> Dict[str, Any]:
        """Label -> value rows for the product details table."""
        return {
            "Brand": self.record.get("brand"),
            "SKU": self.record.get("sku"),
            "Collection": self.record.get("collection"),
            "Price": self.record.get("price"),
            "Inventory Status": self.inventory_status,
            "Visible on Site": self.visible_label,
        }
