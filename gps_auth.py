# gps_auth.py
from __future__ import annotations

from typing import Optional

from gps_types import (
    AuthorizationPending,
    AuthorizationResultSink,
    AuthorizationState,
    PositionProvider,
    SOURCE_ORDER,
)
from shared import logger


class AuthorizationGate:
    """
    Location permission check + request.

    Granted means BOTH the precise and the approximate capability are
    granted. Anything partial is reported as denied.
    """

    def __init__(self, provider: PositionProvider):
        self.provider = provider
        self._sink: Optional[AuthorizationResultSink] = None

    @property
    def pending(self) -> bool:
        return self._sink is not None

    def check_authorization(self) -> AuthorizationState:
        try:
            granted = all(self.provider.is_capability_granted(src) for src in SOURCE_ORDER)
        except Exception as e:
            logger.error(f"  ❌ Permission check failed: {e}")
            return AuthorizationState.DENIED

        return AuthorizationState.GRANTED if granted else AuthorizationState.DENIED

    def request_authorization(self, sink: AuthorizationResultSink) -> None:
        """Prompt the user. `sink` later receives exactly one GRANTED or DENIED."""
        if self._sink is not None:
            raise AuthorizationPending("location permission request already in progress")

        self._sink = sink
        logger.info("   👆 Requesting location permission")

        try:
            self.provider.request_permission(self._on_permission_result)
        except Exception as e:
            logger.error(f"  ❌ Permission request failed: {e}")
            self._on_permission_result(False)

    def _on_permission_result(self, granted: Optional[bool]) -> None:
        sink = self._sink
        if sink is None:
            logger.warning("   👆 Ignoring permission result with no request outstanding")
            return
        self._sink = None

        # None = prompt dismissed without an answer
        if granted:
            result = self.check_authorization()
        else:
            result = AuthorizationState.DENIED

        logger.info(f"   ✅ Location permission result: {result.value}")
        sink(result)
