"""Aggregated health report over the service resources."""

from typing import List, Optional, Protocol, Tuple

import structlog
from pydantic import BaseModel

logger = structlog.get_logger(__name__)


class HealthChecker(Protocol):
    """Resource able to report its own health."""

    async def health(self) -> Tuple[str, Optional[str]]:
        """Return the resource name and an error message if it is unhealthy."""
        ...


class HealthReport(BaseModel):
    """Health report returned by ``/healthz``."""

    info: str
    resources: List[str]
    healthy: bool


async def check_health(
    checkers: List[HealthChecker], version: str, commit: str, build: str
) -> HealthReport:
    """Run every health check and build the report.

    Resources are listed as name/status pairs, status being ``ok`` or the error.

    :param checkers: Resources to check
    :param version: Service version
    :param commit: Commit hash of the build
    :param build: Build date
    :returns: Health report, ``healthy`` is False if any resource failed
    """
    resources: List[str] = []
    healthy = True

    for checker in checkers:
        name, error = await checker.health()
        if error is not None:
            healthy = False
            logger.warning("Resource is unhealthy", resource=name, error=error)
        resources.extend([name, error or "ok"])

    return HealthReport(
        info=f"version: {version}, commit: {commit}, build: {build}",
        resources=resources,
        healthy=healthy,
    )
