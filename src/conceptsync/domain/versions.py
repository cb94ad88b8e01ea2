"""Choose the source version a run traverses against."""

from __future__ import annotations

from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from .errors import NoVersionsAvailableError

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from .model import SourceVersion

log = getLogger(__name__)


def select_source_version(versions: Sequence[SourceVersion]) -> SourceVersion:
    """Return the newest released version, falling back to HEAD.

    "Released" means anything other than the mutable HEAD snapshot; the API
    offers no better signal. Ties on ``created_on`` go to the first version
    listed.
    """

    if not versions:
        raise NoVersionsAvailableError("Source has no versions")

    released = [version for version in versions if not version.is_head]
    if released:
        # max() keeps the first of equal keys
        return max(released, key=lambda version: _as_utc(version.created_on))

    head = next((version for version in versions if version.is_head), None)
    if head is None:
        raise NoVersionsAvailableError("Source has neither a released nor a HEAD version")
    log.warning("Cannot find a released version; using HEAD instead")
    return head


def resolve_version_url(
    versions: Sequence[SourceVersion],
    *,
    now_provider: Callable[[], datetime] | None = None,
) -> str:
    """Pick the version to traverse and return its ``version_url`` base path."""

    chosen = select_source_version(versions)
    now = now_provider() if now_provider else datetime.now(UTC)
    log.info(
        "Using version: %s created %s",
        chosen.version_url,
        describe_age(_as_utc(chosen.created_on), now=now),
    )
    return chosen.version_url


def describe_age(moment: datetime, *, now: datetime) -> str:
    """Render the distance between ``moment`` and ``now`` like "3 days ago"."""

    seconds = int((_as_utc(now) - _as_utc(moment)).total_seconds())
    if seconds < 0:
        return "in the future"
    if seconds < 45:
        return "a few seconds ago"
    units = (
        ("year", 365 * 24 * 3600),
        ("month", 30 * 24 * 3600),
        ("day", 24 * 3600),
        ("hour", 3600),
        ("minute", 60),
    )
    for name, size in units:
        count = round(seconds / size)
        if seconds >= size * 0.75 and count >= 1:
            if count == 1:
                return f"a {name} ago" if name != "hour" else "an hour ago"
            return f"{count} {name}s ago"
    return "a minute ago"


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)
