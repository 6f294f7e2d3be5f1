"""Tests for the aggregation engine."""

import pytest
from datetime import date
from decimal import Decimal

from expenzo.queries.aggregations import (
    AggregationError,
    average,
    count_by_category,
    group_by_category,
    group_by_day,
    max_spending_day,
    per_category_average,
    percentage,
    sum_amounts,
    top_category,
    unique_day_count,
)


class TestSums:
    """Tests for sum_amounts."""

    def test_sum_of_amounts(self, make_expense):
        """Test that the sum equals the arithmetic sum."""
        expenses = [make_expense(amount="10.25"), make_expense(amount="4.75"), make_expense(amount="5")]
        assert sum_amounts(expenses) == Decimal("20.00")

    def test_sum_is_order_independent(self, make_expense):
        """Test that reordering does not change the sum."""
        expenses = [make_expense(amount=a) for a in ("0.1", "0.2", "0.3")]
        assert sum_amounts(expenses) == sum_amounts(list(reversed(expenses))) == Decimal("0.6")

    def test_empty_sum_is_zero(self):
        """Test that no expenses sum to zero."""
        assert sum_amounts([]) == Decimal("0")


class TestGroupByCategory:
    """Tests for group_by_category."""

    def test_sorted_by_total_descending(self, make_expense):
        """Test the documented example: A10, B30, A5 -> B30, A15."""
        expenses = [
            make_expense(category="A", amount=10),
            make_expense(category="B", amount=30),
            make_expense(category="A", amount=5),
        ]
        assert group_by_category(expenses) == [("B", Decimal("30")), ("A", Decimal("15"))]

    def test_only_present_categories(self, make_expense):
        """Test that absent categories never appear and totals add up."""
        expenses = [
            make_expense(category="Food", amount=3),
            make_expense(category="Rent", amount=500),
            make_expense(category="Food", amount=7),
        ]
        result = group_by_category(expenses)
        assert {row.category for row in result} == {"Food", "Rent"}
        assert sum(row.total for row in result) == sum_amounts(expenses)

    def test_ties_keep_first_seen_order(self, make_expense):
        """Test that equal totals keep the order categories first appeared."""
        expenses = [
            make_expense(category="Travel", amount=5),
            make_expense(category="Food", amount=20),
            make_expense(category="Bills", amount=10),
            make_expense(category="Travel", amount=5),
        ]
        assert [row.category for row in group_by_category(expenses)] == ["Food", "Travel", "Bills"]

    def test_empty_input(self):
        """Test that no expenses give no groups."""
        assert group_by_category([]) == []


class TestDays:
    """Tests for per-day aggregations."""

    def test_unique_day_count(self, make_expense):
        """Test the documented example: two distinct days."""
        expenses = [
            make_expense(spent_on="2024-01-01"),
            make_expense(spent_on="2024-01-01"),
            make_expense(spent_on="2024-01-02"),
        ]
        assert unique_day_count(expenses) == 2

    def test_unique_day_count_floored_at_one(self):
        """Test that an empty input counts as one day."""
        assert unique_day_count([]) == 1

    def test_group_by_day(self, make_expense):
        """Test totals per calendar day."""
        expenses = [
            make_expense(spent_on="2024-01-02", amount=4),
            make_expense(spent_on="2024-01-01", amount=1),
            make_expense(spent_on="2024-01-02", amount=6),
        ]
        assert group_by_day(expenses) == {
            date(2024, 1, 2): Decimal("10"),
            date(2024, 1, 1): Decimal("1"),
        }

    def test_max_spending_day(self, make_expense):
        """Test that the day with the highest total wins."""
        expenses = [
            make_expense(spent_on="2024-01-01", amount=30),
            make_expense(spent_on="2024-01-02", amount=20),
            make_expense(spent_on="2024-01-02", amount=15),
        ]
        assert max_spending_day(expenses) == (date(2024, 1, 2), Decimal("35"))

    def test_max_spending_day_tie_goes_to_first_seen(self, make_expense):
        """Test that among equal totals the first-encountered day wins."""
        expenses = [
            make_expense(spent_on="2024-01-09", amount=10),
            make_expense(spent_on="2024-01-03", amount=10),
        ]
        assert max_spending_day(expenses).day == date(2024, 1, 9)

    def test_max_spending_day_empty(self):
        """Test that no expenses give no max day."""
        assert max_spending_day([]) is None


class TestAverages:
    """Tests for average, top_category and per_category_average."""

    def test_average_per_active_day(self, make_expense):
        """Test total divided by distinct days."""
        expenses = [
            make_expense(spent_on="2024-01-01", amount=10),
            make_expense(spent_on="2024-01-01", amount=20),
            make_expense(spent_on="2024-01-05", amount=30),
        ]
        assert average(expenses) == Decimal("30")

    def test_average_of_empty_is_zero(self):
        """Test that the average of nothing is 0, not an error."""
        assert average([]) == 0

    def test_top_category(self, make_expense):
        """Test the largest category total."""
        expenses = [make_expense(category="Food", amount=5), make_expense(category="Rent", amount=50)]
        assert top_category(expenses) == ("Rent", Decimal("50"))
        assert top_category([]) is None

    def test_per_category_average(self, make_expense):
        """Test the average amount per entry in one category."""
        expenses = [
            make_expense(category="Food", amount=10),
            make_expense(category="Food", amount=20),
            make_expense(category="Rent", amount=500),
        ]
        assert per_category_average(expenses, "Food") == Decimal("15")

    def test_per_category_average_absent_category(self, make_expense):
        """Test that an absent category is an error, not a division by zero."""
        with pytest.raises(AggregationError):
            per_category_average([make_expense(category="Food")], "Rent")

    def test_count_by_category(self, make_expense):
        """Test entry counts per category."""
        expenses = [make_expense(category="Food"), make_expense(category="Rent"), make_expense(category="Food")]
        assert count_by_category(expenses) == {"Food": 2, "Rent": 1}


class TestPercentage:
    """Tests for percentage."""

    def test_one_decimal_place(self):
        """Test rounding to one decimal place."""
        assert percentage(Decimal("1"), Decimal("3")) == Decimal("33.3")
        assert percentage(Decimal("2"), Decimal("3")) == Decimal("66.7")
        assert percentage(Decimal("15"), Decimal("45")) == Decimal("33.3")

    def test_whole_share(self):
        """Test that the full amount is 100.0 percent."""
        assert percentage(Decimal("45"), Decimal("45")) == Decimal("100.0")

    def test_zero_total_is_zero_percent(self):
        """Test that a zero total reports 0% instead of dividing by zero."""
        assert percentage(Decimal("0"), Decimal("0")) == Decimal("0.0")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
