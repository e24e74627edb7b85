"""Helpers shared by the push event transformations."""

from collections.abc import Iterator

from webhookd.schemas.descriptors import TransformerConfig
from webhookd.schemas.events import Commit, PushEvent


def included_changes(commit: Commit, config: TransformerConfig) -> Iterator[list[str]]:
    """Yield the commit's path lists in added, modified, removed order, skipping excluded ones."""
    if not config.exclude_additions:
        yield commit.added
    if not config.exclude_modifications:
        yield commit.modified
    if not config.exclude_deletions:
        yield commit.removed


def changed_paths(event: PushEvent, config: TransformerConfig) -> Iterator[str]:
    """Yield every non-excluded path, preserving commit order."""
    for commit in event.commits:
        for paths in included_changes(commit, config):
            yield from paths


def has_qualifying_change(event: PushEvent, config: TransformerConfig) -> bool:
    return any(paths for commit in event.commits for paths in included_changes(commit, config))
