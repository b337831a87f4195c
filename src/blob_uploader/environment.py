"""Read-only probes for ambient UI environment state.

Agent resolution and URL normalization may consult the environment the
uploader runs in: the current page origin, agent identity markers and the
data attributes of the UI root element. Access goes through a probe so that
headless and test callers can supply their own snapshot instead of relying
on process-wide state.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

PRIMARY_AGENT_VAR = "ASSISTOS_AGENT_ID"
LEGACY_AGENT_VAR = "__ASSISTOS_AGENT_ID"
ROOT_AGENT_VAR = "ASSISTOS_ROOT_AGENT"
ORIGIN_VAR = "ASSISTOS_ORIGIN"


@dataclass(frozen=True)
class EnvironmentSnapshot:
    """Values visible in a reachable UI environment."""

    location: str | None = None
    agent_marker: Any = None
    legacy_agent_marker: Any = None
    root_dataset: Mapping[str, Any] = field(default_factory=dict)


EnvironmentProbe = Callable[[], "EnvironmentSnapshot | None"]


def no_environment() -> EnvironmentSnapshot | None:
    """Probe for headless processes: no UI environment is ever reachable."""
    return None


def static_probe(snapshot: EnvironmentSnapshot | None) -> EnvironmentProbe:
    """Return a probe that always reports ``snapshot``."""

    def probe() -> EnvironmentSnapshot | None:
        return snapshot

    return probe


def environ_probe(environ: Mapping[str, str] | None = None) -> EnvironmentProbe:
    """Return a probe backed by process environment variables.

    The mapping is read on every call so changes between uploads are seen.
    The environment counts as unreachable when none of the variables is set.
    """

    def probe() -> EnvironmentSnapshot | None:
        source = os.environ if environ is None else environ
        names = (PRIMARY_AGENT_VAR, LEGACY_AGENT_VAR, ROOT_AGENT_VAR, ORIGIN_VAR)
        if not any(name in source for name in names):
            return None
        root_agent = source.get(ROOT_AGENT_VAR)
        return EnvironmentSnapshot(
            location=source.get(ORIGIN_VAR) or None,
            agent_marker=source.get(PRIMARY_AGENT_VAR),
            legacy_agent_marker=source.get(LEGACY_AGENT_VAR),
            root_dataset={"agent": root_agent} if root_agent is not None else {},
        )

    return probe
