"""Response shapes of the cloud admin and billing endpoints.

The bodies are returned exactly as the server sends them, so keys keep the
server's camelCase spelling.
"""

from __future__ import annotations

from typing import Literal, TypedDict

__all__ = [
    "AdminPanelLoginCode",
    "CloudPlanData",
    "InstanceUsage",
    "PlanMetadata",
    "TrialInfo",
]


class TrialInfo(TypedDict):
    """Trial period lengths, in days."""

    length: int
    gracePeriod: int


class _PlanMetadataBase(TypedDict):
    version: Literal["v1"]
    group: Literal["opt-out", "opt-in", "trial", "pilot"]
    slug: str


class PlanMetadata(_PlanMetadataBase, total=False):
    """Plan classification attached to :class:`CloudPlanData`."""

    trial: TrialInfo


class CloudPlanData(TypedDict):
    """The cloud plan the instance is subscribed to."""

    planId: int
    monthlyExecutionsLimit: int
    activeWorkflowsLimit: int
    credentialsLimit: int
    isActive: bool
    displayName: str
    expirationDate: str
    metadata: PlanMetadata


class _InstanceUsageBase(TypedDict):
    executions: int
    activeWorkflows: int


class InstanceUsage(_InstanceUsageBase, total=False):
    """Usage counters of the instance for the current billing timeframe."""

    timeframe: str


class AdminPanelLoginCode(TypedDict):
    """One-time code for signing in to the cloud admin panel."""

    code: str
