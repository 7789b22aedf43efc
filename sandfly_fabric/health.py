"""
Health checks for sandfly-fabric.

One lightweight probe: GET /v4/system/version through the
authenticated client. The probe never raises; every failure becomes an
"unavailable" report carrying the error text.
"""
from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .integrations.sandfly import SandflyClient

logger = logging.getLogger(__name__)

VERSION_PATH = "/v4/system/version"


class HealthStatus(str, Enum):
    """Health status of the remote service."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"  # Reserved for partial failures, never reported yet
    UNAVAILABLE = "unavailable"


@dataclass
class HealthCheckResult:
    """Result of a health check."""

    app: str
    status: HealthStatus
    latency_ms: Optional[float] = None
    details: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_healthy(self) -> bool:
        return self.status == HealthStatus.HEALTHY

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "app": self.app,
            "status": self.status.value,
            "latencyMs": self.latency_ms,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.details:
            result["details"] = self.details
        return result


class SandflyHealthChecker:
    """
    Health checker for the Sandfly API.

    Performs the version probe and remembers the last result.
    """

    def __init__(self, app_name: str, timeout_seconds: float = 10.0):
        """
        Initialize health checker.

        Args:
            app_name: Name reported in every result
            timeout_seconds: Upper bound for the whole probe, login included
        """
        self.app_name = app_name
        self.timeout_seconds = timeout_seconds
        self._last_check: Optional[HealthCheckResult] = None

    async def check(self, client: "SandflyClient") -> HealthCheckResult:
        """
        Probe the Sandfly server.

        Returns:
            HealthCheckResult, HEALTHY on success and UNAVAILABLE otherwise
        """
        start_time = time.perf_counter()

        try:
            await asyncio.wait_for(
                client.fetch(VERSION_PATH),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            result = self._unavailable(start_time, f"Timeout after {self.timeout_seconds}s")
        except Exception as e:
            result = self._unavailable(start_time, str(e))
        else:
            result = HealthCheckResult(
                app=self.app_name,
                status=HealthStatus.HEALTHY,
                latency_ms=self._elapsed_ms(start_time),
            )

        self._last_check = result
        return result

    def _unavailable(self, start_time: float, error: str) -> HealthCheckResult:
        logger.warning(f"[health] Sandfly unavailable: {error}")
        return HealthCheckResult(
            app=self.app_name,
            status=HealthStatus.UNAVAILABLE,
            latency_ms=self._elapsed_ms(start_time),
            details={"error": error},
        )

    @staticmethod
    def _elapsed_ms(start_time: float) -> float:
        return (time.perf_counter() - start_time) * 1000

    @property
    def last_check(self) -> Optional[HealthCheckResult]:
        """The most recent result, if any probe has run."""
        return self._last_check


__all__ = [
    "HealthStatus",
    "HealthCheckResult",
    "SandflyHealthChecker",
    "VERSION_PATH",
]
