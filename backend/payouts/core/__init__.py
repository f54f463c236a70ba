"""Core — pure ledger rules, domain types and the error hierarchy.

Invariants:
    - Nothing in core/ performs IO or imports from services/, api/ or infrastructure/
"""
