"""
API routes package
"""
from claimsdesk.api.routes import claims, documents

__all__ = ["claims", "documents"]
