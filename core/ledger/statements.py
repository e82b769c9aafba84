"""
Financial statements

Pure functions over a ledger snapshot: no I/O, no clock. Callers load the
entries, manual items, open invoices and payable slips, then hand them in.

- build_profit_and_loss: P&L for one window (month, calendar year, FY)
- build_balance_sheet: position as of a date, scanning the whole ledger
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Any, assert_never

from core.ledger.amounts import money
from core.ledger.calendar import DateWindow, year_of, year_window
from core.ledger.categories import CategoryRegistry
from core.ledger.entry import LedgerEntry
from core.ledger.types import (
    INCOME_GROUPS,
    LEGACY_EXPENSE_LABEL,
    LEGACY_INCOME_LABEL,
    BalanceSheetImpact,
    PLGroup,
)
from core.types import BalanceSheetCategory
from core.utils.timezone import to_storage

if TYPE_CHECKING:
    from core.storage.balance_sheet_store import BalanceSheetItem
    from core.storage.invoice_store import Invoice
    from core.storage.salary_slip_store import SalarySlip

ZERO = Decimal("0")


def margin_pct(part: Decimal, revenue: Decimal) -> str:
    """part / revenue as a percentage with one decimal ("0.0" without revenue)"""
    if revenue <= ZERO:
        return "0.0"
    pct = part / revenue * 100
    return str(pct.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


# =============================================================================
# P&L bucketing
# =============================================================================


def pl_bucket(entry: LedgerEntry, registry: CategoryRegistry) -> tuple[PLGroup, str] | None:
    """P&L (group, line label) an entry sums into

    Legacy entries (no accounting category) fall back by type. Entries whose
    category has no P&L group (balance-sheet-only) return None.
    """
    if not entry.accounting_category:
        if entry.is_credit:
            return PLGroup.REVENUE, LEGACY_INCOME_LABEL
        return PLGroup.OPERATING_EXPENSE, LEGACY_EXPENSE_LABEL

    category = registry.get_category_by_id(entry.accounting_category)
    if category is None or category.pl_group is None:
        return None
    return category.pl_group, category.bucket_label


@dataclass
class StatementLine:
    label: str
    amount: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {"label": self.label, "amount": money(self.amount)}


@dataclass
class PLSection:
    """One P&L group: its total and per-label lines (first-seen order)"""

    group: PLGroup
    lines: list[StatementLine] = field(default_factory=list)

    @property
    def total(self) -> Decimal:
        return sum((line.amount for line in self.lines), ZERO)

    def add(self, label: str, amount: Decimal) -> None:
        for line in self.lines:
            if line.label == label:
                line.amount += amount
                return
        self.lines.append(StatementLine(label, amount))

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": money(self.total),
            "lines": [line.to_dict() for line in self.lines],
        }


@dataclass
class ProfitAndLoss:
    """Profit & Loss statement"""

    period: str
    year: int
    month: int | None
    sections: dict[PLGroup, PLSection]

    @property
    def total_revenue(self) -> Decimal:
        return self.sections[PLGroup.REVENUE].total

    @property
    def total_cogs(self) -> Decimal:
        return self.sections[PLGroup.COGS].total

    @property
    def gross_profit(self) -> Decimal:
        return self.total_revenue - self.total_cogs

    @property
    def total_opex(self) -> Decimal:
        return self.sections[PLGroup.OPERATING_EXPENSE].total

    @property
    def operating_income(self) -> Decimal:
        return self.gross_profit - self.total_opex

    @property
    def total_other_income(self) -> Decimal:
        return self.sections[PLGroup.OTHER_INCOME].total

    @property
    def total_tax(self) -> Decimal:
        return self.sections[PLGroup.TAX].total

    @property
    def net_income(self) -> Decimal:
        return self.operating_income + self.total_other_income - self.total_tax

    def to_dict(self) -> dict[str, Any]:
        return {
            "period": self.period,
            "year": self.year,
            "month": self.month,
            "revenue": self.sections[PLGroup.REVENUE].to_dict(),
            "cogs": self.sections[PLGroup.COGS].to_dict(),
            "grossProfit": money(self.gross_profit),
            "grossMarginPct": margin_pct(self.gross_profit, self.total_revenue),
            "operatingExpenses": self.sections[PLGroup.OPERATING_EXPENSE].to_dict(),
            "operatingIncome": money(self.operating_income),
            "otherIncome": self.sections[PLGroup.OTHER_INCOME].to_dict(),
            "tax": self.sections[PLGroup.TAX].to_dict(),
            "netIncome": money(self.net_income),
            "netMarginPct": margin_pct(self.net_income, self.total_revenue),
            "totals": {
                "totalRevenue": money(self.total_revenue),
                "totalCOGS": money(self.total_cogs),
                "totalOpEx": money(self.total_opex),
                "totalOtherIncome": money(self.total_other_income),
                "totalTax": money(self.total_tax),
            },
        }


def build_profit_and_loss(
    entries: Iterable[LedgerEntry],
    window: DateWindow,
    registry: CategoryRegistry,
    year: int,
    month: int | None = None,
) -> ProfitAndLoss:
    """Build a P&L for the entries dated inside `window`

    Args:
        entries: ledger snapshot (entries outside the window are ignored)
        window: statement period
        registry: category registry
        year: year shown on the statement
        month: month shown on the statement (None for a full year)
    """
    sections = {group: PLSection(group) for group in PLGroup}

    for entry in entries:
        if not window.contains(entry.date):
            continue
        bucket = pl_bucket(entry, registry)
        if bucket is None:
            continue
        group, label = bucket
        sections[group].add(label, entry.amount)

    return ProfitAndLoss(period=window.label, year=year, month=month, sections=sections)


# =============================================================================
# Balance sheet
# =============================================================================


@dataclass
class BalanceSheetLine:
    """One balance sheet line

    System lines are derived from the ledger; manual lines come from
    balance sheet items and carry their id and notes.
    """

    name: str
    amount: Decimal
    is_system: bool = True
    id: str | None = None
    notes: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "amount": money(self.amount),
            "isSystem": self.is_system,
        }
        if not self.is_system:
            data["id"] = self.id
            data["notes"] = self.notes
        return data


def _total(lines: list[BalanceSheetLine]) -> Decimal:
    return sum((line.amount for line in lines), ZERO)


@dataclass
class BalanceSheetFigures:
    """Raw accumulators from the ledger pass (unfloored)"""

    cash: Decimal = ZERO
    bank: Decimal = ZERO
    fixed_assets: Decimal = ZERO
    prepaid: Decimal = ZERO
    owner_capital: Decimal = ZERO
    loan: Decimal = ZERO
    income_all_time: Decimal = ZERO
    expense_all_time: Decimal = ZERO
    income_current_year: Decimal = ZERO
    expense_current_year: Decimal = ZERO
    accounts_receivable: Decimal = ZERO
    accounts_payable: Decimal = ZERO

    @property
    def net_income_current_year(self) -> Decimal:
        return self.income_current_year - self.expense_current_year

    @property
    def retained_earnings(self) -> Decimal:
        return (self.income_all_time - self.expense_all_time) - self.net_income_current_year

    def apply_cash_movement(self, entry: LedgerEntry) -> None:
        """Generic roll-up: signed amount into cash or bank by payment mode"""
        if entry.is_cash:
            self.cash += entry.signed_amount
        else:
            self.bank += entry.signed_amount


@dataclass
class BalanceSheet:
    """Balance sheet as of a date"""

    as_of: datetime
    current_year: int
    figures: BalanceSheetFigures
    current_assets: list[BalanceSheetLine]
    fixed_assets: list[BalanceSheetLine]
    current_liabilities: list[BalanceSheetLine]
    long_term_liabilities: list[BalanceSheetLine]
    equity: list[BalanceSheetLine]

    @property
    def total_assets(self) -> Decimal:
        return _total(self.current_assets) + _total(self.fixed_assets)

    @property
    def total_liabilities(self) -> Decimal:
        return _total(self.current_liabilities) + _total(self.long_term_liabilities)

    @property
    def total_equity(self) -> Decimal:
        return _total(self.equity)

    def to_dict(self) -> dict[str, Any]:
        return {
            "asOf": to_storage(self.as_of),
            "currentYear": self.current_year,
            "assets": {
                "current": [line.to_dict() for line in self.current_assets],
                "fixed": [line.to_dict() for line in self.fixed_assets],
            },
            "liabilities": {
                "current": [line.to_dict() for line in self.current_liabilities],
                "longTerm": [line.to_dict() for line in self.long_term_liabilities],
            },
            "equity": [line.to_dict() for line in self.equity],
            "totals": {
                "totalCurrentAssets": money(_total(self.current_assets)),
                "totalFixedAssets": money(_total(self.fixed_assets)),
                "totalAssets": money(self.total_assets),
                "totalCurrentLiabilities": money(_total(self.current_liabilities)),
                "totalLongTermLiabilities": money(_total(self.long_term_liabilities)),
                "totalLiabilities": money(self.total_liabilities),
                "totalEquity": money(self.total_equity),
                "totalLiabilitiesAndEquity": money(self.total_liabilities + self.total_equity),
            },
        }


def _apply_entry(
    figures: BalanceSheetFigures,
    entry: LedgerEntry,
    registry: CategoryRegistry,
    current_year: DateWindow,
) -> None:
    category = registry.get_category_by_id(entry.accounting_category)
    impact = category.bs_impact if category else BalanceSheetImpact.NONE

    match impact:
        case BalanceSheetImpact.FIXED_ASSET:
            figures.fixed_assets += entry.amount
        case BalanceSheetImpact.PREPAID_EXPENSE:
            figures.prepaid += entry.amount
        case BalanceSheetImpact.EQUITY_CAPITAL:
            # Capital lands in bank; not through the generic roll-up
            figures.owner_capital += entry.amount
            figures.bank += entry.amount
        case BalanceSheetImpact.LONG_TERM_LIABILITY:
            figures.loan += entry.amount
            figures.bank += entry.amount
        case BalanceSheetImpact.LONG_TERM_LIABILITY_REDUCTION:
            figures.loan -= entry.amount
            figures.apply_cash_movement(entry)
        case BalanceSheetImpact.NONE:
            figures.apply_cash_movement(entry)
        case _:
            assert_never(impact)

    bucket = pl_bucket(entry, registry)
    if bucket is None:
        return
    group, _label = bucket
    in_year = current_year.contains(entry.date)

    if group in INCOME_GROUPS:
        figures.income_all_time += entry.amount
        if in_year:
            figures.income_current_year += entry.amount
    else:
        figures.expense_all_time += entry.amount
        if in_year:
            figures.expense_current_year += entry.amount


def _manual_lines(items: list[BalanceSheetItem], category: BalanceSheetCategory) -> list[BalanceSheetLine]:
    return [
        BalanceSheetLine(
            name=item.name,
            amount=item.amount,
            is_system=False,
            id=item.id,
            notes=item.notes,
        )
        for item in items
        if item.category == category.value
    ]


def build_balance_sheet(
    entries: Iterable[LedgerEntry],
    manual_items: Iterable[BalanceSheetItem],
    receivable_invoices: Iterable[Invoice],
    payable_slips: Iterable[SalarySlip],
    as_of: datetime,
    registry: CategoryRegistry,
) -> BalanceSheet:
    """Build the balance sheet

    The roll-up always covers the entire ledger; `as_of` only picks the IST
    calendar year whose net income is split out of retained earnings.

    Args:
        entries: every ledger entry
        manual_items: manual balance sheet items
        receivable_invoices: invoices with status Pending, Partial, or Overdue
        payable_slips: finalized slips of payroll-enabled employees
        as_of: reference date for the current-year split
        registry: category registry
    """
    current_year = year_of(as_of)
    year = year_window(current_year)
    figures = BalanceSheetFigures()

    for entry in entries:
        _apply_entry(figures, entry, registry, year)

    figures.accounts_receivable = sum(
        (invoice.outstanding for invoice in receivable_invoices), ZERO
    )
    figures.accounts_payable = sum(
        (slip.net_pay for slip in payable_slips if slip.payroll_enabled), ZERO
    )

    items = list(manual_items)

    current_assets = [
        BalanceSheetLine("Cash in Hand", max(ZERO, figures.cash)),
        BalanceSheetLine("Bank Accounts", max(ZERO, figures.bank)),
        BalanceSheetLine("Accounts Receivable", figures.accounts_receivable),
        BalanceSheetLine("Prepaid Expenses", figures.prepaid),
        *_manual_lines(items, BalanceSheetCategory.CURRENT_ASSET),
    ]
    fixed_assets = [
        BalanceSheetLine("Fixed Assets", figures.fixed_assets),
        *_manual_lines(items, BalanceSheetCategory.FIXED_ASSET),
    ]
    current_liabilities = [
        BalanceSheetLine("Accounts Payable (Salaries)", figures.accounts_payable),
        *_manual_lines(items, BalanceSheetCategory.CURRENT_LIABILITY),
    ]
    long_term_liabilities = [
        BalanceSheetLine("Business Loans", max(ZERO, figures.loan)),
        *_manual_lines(items, BalanceSheetCategory.LONG_TERM_LIABILITY),
    ]
    equity = [
        BalanceSheetLine("Owner's Capital", figures.owner_capital),
        BalanceSheetLine("Retained Earnings", figures.retained_earnings),
        BalanceSheetLine("Current Year Net Income", figures.net_income_current_year),
        *_manual_lines(items, BalanceSheetCategory.EQUITY),
    ]

    return BalanceSheet(
        as_of=as_of,
        current_year=current_year,
        figures=figures,
        current_assets=current_assets,
        fixed_assets=fixed_assets,
        current_liabilities=current_liabilities,
        long_term_liabilities=long_term_liabilities,
        equity=equity,
    )
