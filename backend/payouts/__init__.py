"""Restaurant Payouts — wallet ledger and withdrawal request back-office.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
