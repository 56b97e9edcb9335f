"""
계좌 서비스 어댑터

결제 서비스 → 계좌 서비스 HTTP 연동.
"""

from adapters.accounts.rest_client import AccountsApiError, AccountsRestClient

__all__ = [
    "AccountsRestClient",
    "AccountsApiError",
]
