"""
API routes package

Router modules per feature:
- health: health check
- transactions: ledger entries (list / create / update / delete)
- balance_sheet: balance sheet and manual items
- pnl: Profit & Loss statement
- categories: accounting category taxonomy
"""
