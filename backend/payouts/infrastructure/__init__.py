"""Infrastructure Layer — database sessions, logging setup and the SMTP mailer.

Invariants:
    - Infrastructure never imports from core/ ledger rules (errors excepted)
"""
