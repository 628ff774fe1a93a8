"""
Account capability: result types, the gateway protocol and the SQLAlchemy
backed account service.
"""

from .account_service import AccountService
from .models import Account
from .results import AccountInfo, AuthFailure, AuthGateway, AuthResult, FailureKind

__all__ = [
    "Account",
    "AccountInfo",
    "AccountService",
    "AuthFailure",
    "AuthGateway",
    "AuthResult",
    "FailureKind",
]
