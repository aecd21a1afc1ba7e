"""BaseService — abstract foundation for all threeway services.

Every service receives the unified settings at construction time and
reads its defaults from the matching config section.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from threeway.config.settings import ThreewaySettings


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class BenchService(BaseService):
            def run(self, depth: int | None = None, ...) -> ServiceResult:
                depth = self.settings.bench.depth if depth is None else depth
                ...
    """

    def __init__(self, settings: ThreewaySettings) -> None:
        self._settings = settings

    @property
    def settings(self) -> ThreewaySettings:
        return self._settings
