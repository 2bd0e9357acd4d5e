"""Domain error definitions."""

from __future__ import annotations


class RewriteSyncError(RuntimeError):
    """Base class for failures raised while reconciling rewrites."""


class RootCategoryNotFoundError(RewriteSyncError):
    """Raised when the configured root category cannot be loaded."""

    def __init__(self, category_id: int) -> None:
        super().__init__(f"Root category {category_id} does not exist")
        self.category_id = category_id
