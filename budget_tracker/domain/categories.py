"""Keyword-based merchant categorization"""

from typing import Optional, Sequence, Tuple

from budget_tracker.config import settings

# Declaration order is the tie-break: the first category with a matching keyword wins.
CATEGORY_RULES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("Food", ("swiggy", "zomato", "dominos", "mcdonald", "restaurant", "cafe")),
    ("Transport", ("uber", "ola", "rapido", "metro", "fuel", "petrol")),
    ("Shopping", ("amazon", "flipkart", "myntra", "ajio")),
    ("Entertainment", ("netflix", "spotify", "hotstar", "prime video")),
    ("Bills", ("electricity", "water", "bill", "recharge", "airtel", "jio")),
    ("Cash", ("atm", "cash withdrawal")),
)


class MerchantCategoryClassifier:
    """Maps free-text merchant names to a category label"""

    def __init__(
        self,
        rules: Sequence[Tuple[str, Sequence[str]]] = CATEGORY_RULES,
        default_category: str | None = None,
    ):
        self.rules = tuple((label, tuple(k.lower() for k in keywords)) for label, keywords in rules)
        self.default_category = default_category or settings.default_category

    def classify(self, merchant: Optional[str]) -> str:
        """
        Return the first category whose keywords appear in the merchant text.

        Matching is a case-insensitive, unanchored substring test. Missing,
        blank, or unmatched text falls back to the default category.
        """
        if not merchant or not merchant.strip():
            return self.default_category

        text = merchant.lower()
        for label, keywords in self.rules:
            if any(keyword in text for keyword in keywords):
                return label

        return self.default_category


def classify_merchant(merchant: Optional[str]) -> str:
    return MerchantCategoryClassifier().classify(merchant)
