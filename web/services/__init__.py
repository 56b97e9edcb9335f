"""
Web 서비스 패키지

비즈니스 로직 처리
"""

from web.services.account_service import AccountService
from web.services.payment_service import PaymentService

__all__ = [
    "AccountService",
    "PaymentService",
]
