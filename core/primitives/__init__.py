"""
Back Office Core Primitives - Shared Record Shapes
====================================================
Primitives are the engine-agnostic building blocks the ledger and
stock engines consume. They are:

- Pure Python (no Django dependency)
- Immutable (frozen dataclasses)
- Total on input: `from_dict` never raises on missing fields

Primitives:
    fields     - raw-field coercion helpers
    document   - sale / purchase invoices, receipt / payment vouchers
    party      - customers and suppliers, entity selection keys
    ledger     - normalized ledger entries and totals
    inventory  - stock-holding items and stock status
    item       - transaction line items
    expense    - operating expenses (profit & loss only)
"""
