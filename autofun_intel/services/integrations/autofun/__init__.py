"""auto.fun API integration."""

from .client import AutofunApiError, AutofunClient

__all__ = ["AutofunApiError", "AutofunClient"]
