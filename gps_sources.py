# gps_sources.py
from __future__ import annotations

from gps_types import PositionProvider, PositionSource, SOURCE_ORDER
from shared import logger


class SourceAvailability:
    """Asks the platform which sources are switched on. Nothing is cached."""

    def __init__(self, provider: PositionProvider):
        self.provider = provider

    def is_enabled(self, source: PositionSource) -> bool:
        try:
            return bool(self.provider.is_source_enabled(source))
        except Exception as e:
            logger.error(f"  ❌ Could not query {source.provider_name} provider: {e}")
            return False

    def enabled_sources(self) -> list[PositionSource]:
        enabled = [src for src in SOURCE_ORDER if self.is_enabled(src)]
        logger.info(f"   ✅ Enabled sources: {[s.provider_name for s in enabled] or 'none'}")
        return enabled
