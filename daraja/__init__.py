"""
Daraja (M-Pesa) API client for Django

A reusable client for M-Pesa Express, C2B, B2C, balance, transaction status
and reversal requests, with access token caching and security credential
generation built in.
"""

__version__ = "0.1.0"

from .client import DarajaClient
from .config import DarajaConfig
from .constants import Environment

__all__ = ['DarajaClient', 'DarajaConfig', 'Environment']
