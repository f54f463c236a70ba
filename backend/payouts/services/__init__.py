"""Services — orchestrate DB reads/writes around the pure core ledger rules."""
