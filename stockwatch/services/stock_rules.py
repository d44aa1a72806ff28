"""Critical stock classification and crossing detection."""

from typing import Optional, Union

from stockwatch.core.enums import StockLevel

Quantity = Union[int, float]

DEFAULT_CRITICAL_THRESHOLD = 5


class StockClassifier:
    """Maps a quantity to CRITICAL or NORMAL against one fixed threshold.

    The threshold is shared by every tenant and product.
    """

    def __init__(self, threshold: Quantity = DEFAULT_CRITICAL_THRESHOLD):
        self.threshold = threshold

    @classmethod
    def from_settings(cls, settings) -> "StockClassifier":
        return cls(threshold=settings.CRITICAL_STOCK_THRESHOLD)

    def classify(self, quantity: Quantity) -> StockLevel:
        if quantity <= self.threshold:
            return StockLevel.CRITICAL
        return StockLevel.NORMAL

    def is_critical(self, quantity: Quantity) -> bool:
        return self.classify(quantity) is StockLevel.CRITICAL

    def has_just_become_critical(self, old_quantity: Optional[Quantity], new_quantity: Quantity) -> bool:
        """True only when this write moved the product into critical stock.

        ``old_quantity`` is None when the product is observed for the first
        time (creation). Staying critical or recovering never fires.
        """
        if not self.is_critical(new_quantity):
            return False
        if old_quantity is None:
            return True
        return not self.is_critical(old_quantity)


_default_classifier = StockClassifier()


def classify(quantity: Quantity) -> StockLevel:
    return _default_classifier.classify(quantity)


def has_just_become_critical(old_quantity: Optional[Quantity], new_quantity: Quantity) -> bool:
    return _default_classifier.has_just_become_critical(old_quantity, new_quantity)
