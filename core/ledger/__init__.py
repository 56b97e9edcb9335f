"""
계좌 원장 (Account Ledger)

계좌와 잔고 변동 기록(Movement)을 관리.
잔고는 입금/출금 시 Movement 추가와 함께만 변경된다.

사용 예시:
```python
from core.ledger import AccountLifecycleHandler, BalanceOperationHandler

lifecycle = AccountLifecycleHandler(db)
account = await lifecycle.create(client_id="c1")

balance = BalanceOperationHandler(db)
account = await balance.deposit(account.account_id, "100")
movements = await balance.list_movements(account.account_id)
```
"""

from core.ledger.authz import (
    AllowAllAuthorizer,
    Authorizer,
    Caller,
    RoleAuthorizer,
)
from core.ledger.balance import BalanceOperationHandler
from core.ledger.errors import (
    AccountNotActiveError,
    AccountNotFoundError,
    ForbiddenError,
    InsufficientFundsError,
    InvalidAmountError,
    LedgerError,
    LedgerStoreError,
    LedgerValidationError,
)
from core.ledger.lifecycle import AccountLifecycleHandler, generate_account_number
from core.ledger.models import Account, Movement, ServicePayment
from core.ledger.store import AccountStore, MovementStore

__all__ = [
    # 핸들러
    "AccountLifecycleHandler",
    "BalanceOperationHandler",
    "generate_account_number",
    # 저장소
    "AccountStore",
    "MovementStore",
    # 모델
    "Account",
    "Movement",
    "ServicePayment",
    # 권한
    "Caller",
    "Authorizer",
    "AllowAllAuthorizer",
    "RoleAuthorizer",
    # 예외
    "LedgerError",
    "LedgerValidationError",
    "InvalidAmountError",
    "AccountNotFoundError",
    "AccountNotActiveError",
    "InsufficientFundsError",
    "ForbiddenError",
    "LedgerStoreError",
]
