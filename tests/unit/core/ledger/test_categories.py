"""
Category taxonomy tests
"""

import pytest

from core.ledger.categories import (
    ACCOUNTING_CATEGORIES,
    Category,
    CategoryRegistry,
    get_default_registry,
)
from core.ledger.types import AppliesTo, BalanceSheetImpact, PLGroup


class TestCategory:
    """Category"""

    def test_applies_to_type(self, registry: CategoryRegistry) -> None:
        salary = registry.get_category_by_id("salary")
        assert salary is not None

        assert salary.applies_to_type("Debit") is True
        assert salary.applies_to_type("Credit") is False

    def test_applies_to_both(self) -> None:
        category = Category(
            id="adjustment", label="Adjustment", applies_to=AppliesTo.BOTH,
            pl_group=None, pl_label=None, bs_impact=BalanceSheetImpact.NONE,
            description="",
        )

        assert category.applies_to_type("Credit") is True
        assert category.applies_to_type("Debit") is True

    def test_bucket_label(self, registry: CategoryRegistry) -> None:
        hosting = registry.get_category_by_id("hosting_cloud")
        assert hosting is not None

        assert hosting.bucket_label == "Hosting & Infrastructure"

    def test_to_dict(self, registry: CategoryRegistry) -> None:
        data = registry.get_category_by_id("asset_purchase").to_dict()

        assert data["id"] == "asset_purchase"
        assert data["appliesTo"] == "Debit"
        assert data["plGroup"] is None
        assert data["bsImpact"] == "fixed_asset"

    def test_to_dict_without_bs_impact(self, registry: CategoryRegistry) -> None:
        data = registry.get_category_by_id("office_rent").to_dict()

        assert data["plGroup"] == "Operating Expense"
        assert data["bsImpact"] is None


class TestCategoryRegistry:
    """CategoryRegistry"""

    def test_builtin_ids_unique(self) -> None:
        ids = [c.id for c in ACCOUNTING_CATEGORIES]

        assert len(ids) == len(set(ids))

    def test_duplicate_rejected(self) -> None:
        category = ACCOUNTING_CATEGORIES[0]

        with pytest.raises(ValueError, match="Duplicate"):
            CategoryRegistry([category, category])

    def test_lookup(self, registry: CategoryRegistry) -> None:
        assert "salary" in registry
        assert registry.get_category_by_id("unknown") is None
        assert registry.get_category_by_id(None) is None
        assert registry.get_category_by_id("") is None

    def test_every_category_has_a_destination(self, registry: CategoryRegistry) -> None:
        """Each category lands in the P&L, the balance sheet, or both"""
        for category in registry:
            assert category.pl_group is not None or category.bs_impact != BalanceSheetImpact.NONE, category.id

    def test_categories_by_type(self, registry: CategoryRegistry) -> None:
        credit_ids = {c.id for c in registry.get_categories_by_type("Credit")}
        debit_ids = {c.id for c in registry.get_categories_by_type("Debit")}

        assert {"invoice_payment", "owner_capital", "loan_received"} <= credit_ids
        assert {"salary", "gst_payment", "loan_repayment"} <= debit_ids
        assert credit_ids.isdisjoint(debit_ids)
        assert len(credit_ids) + len(debit_ids) == len(registry)

    def test_grouped_credit(self, registry: CategoryRegistry) -> None:
        grouped = registry.get_grouped_categories_by_type("Credit")

        assert list(grouped) == ["Revenue", "Other Income", "Balance Sheet Entry"]
        assert [c.id for c in grouped["Balance Sheet Entry"]] == ["owner_capital", "loan_received"]

    def test_grouped_debit(self, registry: CategoryRegistry) -> None:
        grouped = registry.get_grouped_categories_by_type("Debit")

        assert set(grouped) == {
            PLGroup.COGS.value,
            PLGroup.OPERATING_EXPENSE.value,
            PLGroup.TAX.value,
            "Balance Sheet Entry",
        }
        assert len(grouped["Operating Expense"]) == 8

    def test_default_registry_cached(self) -> None:
        assert get_default_registry() is get_default_registry()
