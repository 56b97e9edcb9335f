"""
스토리지 모듈

계좌 원장 외부의 저장소 (공과금 납부 기록)
"""

from core.storage.payment_store import PaymentStore

__all__ = [
    "PaymentStore",
]
