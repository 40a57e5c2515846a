"""
Token metadata access.
"""

from .metadata import TokenMetadataProbe

__all__ = ["TokenMetadataProbe"]
