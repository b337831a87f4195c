"""Agent resolution strategies.

An agent resolver is any zero-argument callable returning the agent
(namespace) an upload belongs to, or an empty string when unknown. The
uploader calls it once per upload.
"""

from __future__ import annotations

from typing import Any, Callable, Sequence

from .environment import EnvironmentProbe, EnvironmentSnapshot, no_environment
from .urls import coerce_string

AgentResolver = Callable[[], str]
AgentCandidate = Callable[[EnvironmentSnapshot], Any]


def primary_marker(snapshot: EnvironmentSnapshot) -> Any:
    return snapshot.agent_marker


def legacy_marker(snapshot: EnvironmentSnapshot) -> Any:
    return snapshot.legacy_agent_marker


def root_dataset_agent(snapshot: EnvironmentSnapshot) -> Any:
    return snapshot.root_dataset.get("agent")


DEFAULT_AGENT_CANDIDATES: tuple[AgentCandidate, ...] = (
    primary_marker,
    legacy_marker,
    root_dataset_agent,
)


def create_browser_agent_resolver(
    fallback_agent: str = "",
    *,
    probe: EnvironmentProbe = no_environment,
    candidates: Sequence[AgentCandidate] = DEFAULT_AGENT_CANDIDATES,
) -> AgentResolver:
    """Build a resolver that reads agent markers from the UI environment.

    Candidates are evaluated in order and the first non-blank string wins.
    When the environment is unreachable or no candidate is usable the
    trimmed ``fallback_agent`` is returned.
    """
    ordered = tuple(candidates)

    def resolve() -> str:
        fallback = coerce_string(fallback_agent).strip()
        snapshot = probe()
        if snapshot is None:
            return fallback
        for candidate in ordered:
            value = coerce_string(candidate(snapshot)).strip()
            if value:
                return value
        return fallback

    return resolve


def static_agent_resolver(agent: str) -> AgentResolver:
    """Build a resolver that always returns ``agent``."""
    value = coerce_string(agent).strip()

    def resolve() -> str:
        return value

    return resolve
