"""Request context for the API layer.

Provides the immutable authentication context resolved for each request.
"""

from src.billing.api.context.auth_context import AuthContext

__all__ = ["AuthContext"]
