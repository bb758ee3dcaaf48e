"""
Tests for the uniform-price clearing engine.

These tests verify:
1. Clearing price search and winner selection
2. Edge cases (empty, single, equal bids, uint256 amounts)
3. Tie-break and ordering rules
4. Result invariants (threshold, idempotence, monotonicity)
"""

import asyncio
from dataclasses import dataclass

import pytest

from matt.core.clearing import (
    BidLike,
    ClearingResult,
    choose_best_bids,
    clear_bids,
    clear_verified_bids,
    find_clearing_price,
    sort_bids,
)


def accept_all(bid):
    return True


def choose(bids, verify=accept_all):
    return asyncio.run(choose_best_bids(bids, verify))


def amounts(bids):
    return [b.amount for b in bids]


@dataclass(frozen=True)
class PlainBid:
    """Minimal bid carrying only an amount and a label."""
    amount: int
    label: str = ""


# =============================================================================
# Reference Scenarios
# =============================================================================


class TestChooseBestBids:
    """Reference auction scenarios."""

    def test_empty(self):
        """No bids, no winners."""
        assert choose([]) == []

    def test_single_bid(self, bids):
        """A lone bid of 1 wins on its own."""
        signed = bids([1])
        best = choose(signed)

        assert best == signed
        assert best[0].amount == 1

    def test_one_fifty_ninety_nine(self, bids):
        """Revenue at 50 is 100, at 99 is 99, so 50 clears."""
        best = choose(bids([1, 50, 99]))

        assert len(best) == 2
        assert best[0].amount == 50
        assert amounts(best) == [50, 99]

    def test_with_zero_bid(self, bids):
        """Candidates 10, 50, 99 give 30, 100, 99."""
        best = choose(bids([0, 10, 50, 99]))

        assert amounts(best) == [50, 99]

    def test_all_equal(self, bids):
        """Equal bids all win at their common price."""
        result = clear_verified_bids(bids([5, 5, 5]))

        assert result.clearing_price == 5
        assert amounts(result.winners) == [5, 5, 5]

    def test_unsorted_input(self, bids):
        """Input order does not affect which bids win."""
        best = choose(bids([99, 1, 50]))
        assert amounts(best) == [50, 99]


# =============================================================================
# Verification Filtering
# =============================================================================


class TestVerificationFiltering:
    """Tests for dropping unverified bids before clearing."""

    def test_rejected_bid_never_wins(self, bids):
        """A rejected high bid is ignored entirely."""
        signed = bids([1, 50, 99, 1000])
        best = choose(signed, lambda b: b.amount != 1000)

        assert amounts(best) == [50, 99]

    def test_none_verify(self, bids):
        """Nothing verifies: empty result, price 0."""
        result = asyncio.run(clear_bids(bids([3, 4, 5]), lambda b: False))

        assert result.winners == ()
        assert result.clearing_price == 0
        assert result.verified_count == 0

    def test_verifier_error_excludes_only_that_bid(self, bids):
        """An exception from the verifier counts as a rejection."""
        def flaky(bid):
            if bid.amount == 99:
                raise RuntimeError("rpc unavailable")
            return True

        best = choose(bids([1, 50, 99, 60]), flaky)
        # Remaining [1, 50, 60]: 50 -> 100, 60 -> 60
        assert amounts(best) == [50, 60]

    def test_async_verifier(self, bids):
        """Coroutine verifiers give the same result as plain ones."""
        signed = bids([1, 50, 99, 7])

        async def verify(bid):
            await asyncio.sleep(0)
            return bid.amount != 7

        assert choose(signed, verify) == choose(signed, lambda b: b.amount != 7)

    def test_async_verifier_error(self, bids):
        """Async verifier errors are contained as well."""
        async def verify(bid):
            if bid.amount == 50:
                raise ValueError("bad signature")
            return True

        best = choose(bids([1, 50, 99]), verify)
        assert amounts(best) == [99]


# =============================================================================
# Clearing Rules
# =============================================================================


class TestClearingRules:
    """Tests for the price search rules."""

    def test_lowest_price_wins_ties(self, bids):
        """2 -> 4 and 4 -> 4: the first (lower) price is kept."""
        result = clear_verified_bids(bids([1, 2, 4]))

        assert result.clearing_price == 2
        assert amounts(result.winners) == [2, 4]

    def test_lowest_bid_is_not_a_candidate(self, bids):
        """The search starts at the second lowest bid."""
        result = clear_verified_bids(bids([50, 60]))

        assert result.clearing_price == 60
        assert amounts(result.winners) == [60]

    def test_zero_revenue_keeps_price_zero(self, bids):
        """All-zero bids never beat the initial revenue of 0."""
        result = clear_verified_bids(bids([0, 0]))

        assert result.clearing_price == 0
        assert len(result.winners) == 2

    def test_uint256_amounts(self, bids):
        """Amounts beyond 64 bits are compared and multiplied exactly."""
        base = 2**200
        result = clear_verified_bids(bids([base, base + 1, 3 * base]))

        # (base + 1) * 2 < 3 * base
        assert result.clearing_price == 3 * base
        assert amounts(result.winners) == [3 * base]
        assert result.revenue == 3 * base

    def test_max_uint256(self, bids):
        """The largest uint256 bid clears without loss."""
        top = 2**256 - 1
        result = clear_verified_bids(bids([1, top, top]))

        assert result.clearing_price == top
        assert result.revenue == 2 * top

    def test_stable_order_for_equal_amounts(self):
        """Equal amounts keep their input order among winners."""
        first = PlainBid(5, "first")
        second = PlainBid(5, "second")
        result = clear_verified_bids([first, PlainBid(3), second])

        assert result.winners == (first, second)

    def test_sort_bids_is_stable(self):
        a, b, c = PlainBid(2, "a"), PlainBid(1), PlainBid(2, "c")
        assert sort_bids([a, b, c]) == [b, a, c]

    def test_find_clearing_price_direct(self):
        assert find_clearing_price([]) == 0
        assert find_clearing_price([PlainBid(9)]) == 0
        assert find_clearing_price([PlainBid(1), PlainBid(50), PlainBid(99)]) == 50

    def test_bid_like_protocol(self, bids):
        assert isinstance(PlainBid(1), BidLike)
        assert isinstance(bids([1])[0], BidLike)


# =============================================================================
# Result Invariants
# =============================================================================


class TestResultInvariants:
    """Properties every clearing result must satisfy."""

    SAMPLE = [7, 3, 12, 12, 1, 40, 9, 25, 25, 0]

    def test_threshold_partition(self, bids):
        """Winners are >= price, every other verified bid is < price."""
        signed = bids(self.SAMPLE)
        result = clear_verified_bids(signed)

        winners = set(result.winners)
        for bid in signed:
            if bid in winners:
                assert bid.amount >= result.clearing_price
            else:
                assert bid.amount < result.clearing_price

    def test_revenue_is_maximal_among_candidates(self, bids):
        signed = bids(self.SAMPLE)
        result = clear_verified_bids(signed)

        ordered = sorted(self.SAMPLE)
        for price in ordered[1:]:
            revenue = price * sum(1 for a in ordered if a >= price)
            assert revenue <= result.revenue

    def test_idempotent(self, bids):
        signed = bids(self.SAMPLE)
        first = clear_verified_bids(signed)
        second = clear_verified_bids(signed)

        assert first == second

    def test_adding_low_bid_keeps_result(self, bids):
        """A new bid below the clearing price leaves winners unchanged."""
        signed = bids([1, 50, 99])
        before = clear_verified_bids(signed)

        extra = bids([1, 50, 99, 20])[3]
        after = clear_verified_bids(signed + [extra])

        assert after.clearing_price == before.clearing_price == 50
        assert after.winners == before.winners

    def test_input_not_mutated(self, bids):
        signed = bids([9, 2, 5])
        snapshot = list(signed)
        clear_verified_bids(signed)

        assert signed == snapshot


# =============================================================================
# ClearingResult
# =============================================================================


class TestClearingResult:
    """Tests for result accessors."""

    def test_revenue_and_editions(self, bids):
        result = clear_verified_bids(bids([1, 50, 99]))

        assert result.editions == 2
        assert result.revenue == 100
        assert result.verified_count == 3

    def test_charges_use_clearing_price(self, bids):
        """Every winner is charged the same price, not their bid."""
        result = clear_verified_bids(bids([1, 50, 99]))

        charges = result.charges()
        assert [bid.amount for bid, _ in charges] == [50, 99]
        assert {price for _, price in charges} == {50}

    def test_empty_result(self):
        result = ClearingResult(winners=(), clearing_price=0, verified_count=0)

        assert result.revenue == 0
        assert result.charges() == []

    def test_frozen(self):
        result = ClearingResult(winners=(), clearing_price=0, verified_count=0)
        with pytest.raises(AttributeError):
            result.clearing_price = 1
