# tests/unit/services/test_stock_rules.py
import pytest

from stockwatch.core.enums import StockLevel
from stockwatch.services.stock_rules import StockClassifier, classify, has_just_become_critical


@pytest.mark.parametrize("quantity", [0, 1, 2, 3, 4, 5, 4.5, 5.0])
def test_quantities_at_or_below_threshold_are_critical(quantity):
    assert classify(quantity) is StockLevel.CRITICAL


@pytest.mark.parametrize("quantity", [5.01, 6, 10, 1000])
def test_quantities_above_threshold_are_normal(quantity):
    assert classify(quantity) is StockLevel.NORMAL


@pytest.mark.parametrize(
    "old, new, expected",
    [
        (10, 3, True),     # crossing into critical
        (6, 5, True),      # boundary crossing
        (None, 2, True),   # created at a critical level
        (3, 1, False),     # already critical, no re-fire
        (5, 5, False),
        (3, 10, False),    # recovery
        (None, 8, False),  # created above threshold
        (10, 7, False),
    ],
)
def test_has_just_become_critical(old, new, expected):
    assert has_just_become_critical(old, new) is expected


def test_threshold_is_injected():
    classifier = StockClassifier(threshold=2)

    assert classifier.threshold == 2
    assert classifier.is_critical(2)
    assert not classifier.is_critical(3)
    assert classifier.has_just_become_critical(3, 2)
    assert not classifier.has_just_become_critical(10, 4)


def test_from_settings_reads_threshold(settings):
    settings.CRITICAL_STOCK_THRESHOLD = 12
    classifier = StockClassifier.from_settings(settings)

    assert classifier.classify(12) is StockLevel.CRITICAL
    assert classifier.classify(13) is StockLevel.NORMAL
