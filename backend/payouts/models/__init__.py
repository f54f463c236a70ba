"""ORM Models — SQLAlchemy declarative models for the payouts ledger.

Invariants:
    - All models inherit from Base (db/base.py)
    - All models imported here so string-based relationship() references
      resolve before any query runs
"""

from payouts.models.restaurant import Restaurant  # noqa: F401
from payouts.models.admin import Admin  # noqa: F401
from payouts.models.order import Order  # noqa: F401
from payouts.models.wallet import RestaurantWallet, WalletTransaction  # noqa: F401
from payouts.models.withdrawal_request import WithdrawalRequest  # noqa: F401
