"""
Core domain models and pure functions for etcdkv.

This module contains the result models, URL composition and response
decoding that are independent of the HTTP transport.
"""

from .models import Endpoint, Success, Failure, StoreResult
from .urls import build_url, build_form_body
from .decoder import decode

__all__ = ["Endpoint", "Success", "Failure", "StoreResult", "build_url", "build_form_body", "decode"]
