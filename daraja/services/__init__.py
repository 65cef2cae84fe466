"""
Service modules for Daraja API operations.
"""

from .auth_service import AuthService
from .express_service import ExpressService
from .c2b_service import C2BService
from .b2c_service import B2CService
from .account_service import AccountService

__all__ = [
    'AuthService',
    'ExpressService',
    'C2BService',
    'B2CService',
    'AccountService',
]
