"""Request construction API.

Architecture:
    - requests.py: pure builder functions returning RequestDescriptor
    - batch.py: BatchBuilder, a fluent collector for batch sub-requests
"""

from . import requests
from .batch import BatchBuilder

__all__ = ["BatchBuilder", "requests"]
