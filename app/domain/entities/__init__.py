"""Domain entities.

Pure domain models; no persistence or transport concerns.
"""

from app.domain.entities.caller import CallerContext

__all__ = ["CallerContext"]
