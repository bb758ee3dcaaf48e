"""
Tests for the revenue curve.
"""

from matt.core.clearing import RevenuePoint, clear_verified_bids, revenue_curve


class TestRevenueCurve:
    """Tests for price vs revenue points."""

    def test_basic(self, bids):
        assert revenue_curve(bids([1, 50, 99])) == [
            RevenuePoint(price=1, bidders=3, revenue=3),
            RevenuePoint(price=50, bidders=2, revenue=100),
            RevenuePoint(price=99, bidders=1, revenue=99),
        ]

    def test_duplicates_collapse(self, bids):
        """Equal amounts produce one point counting all of them."""
        assert revenue_curve(bids([7, 5, 5])) == [
            RevenuePoint(price=5, bidders=3, revenue=15),
            RevenuePoint(price=7, bidders=1, revenue=7),
        ]

    def test_empty(self):
        assert revenue_curve([]) == []

    def test_peak_matches_clearing(self, bids):
        """Away from ties, the curve peak is the clearing price."""
        signed = bids([7, 3, 12, 12, 1, 40, 9, 25, 25])
        peak = max(revenue_curve(signed), key=lambda p: p.revenue)

        assert peak.price == clear_verified_bids(signed).clearing_price == 25
