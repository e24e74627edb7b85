"""Transform GitHub push events into the name of the pushed repository."""

from __future__ import annotations

from webhookd.errors import HaltEvent
from webhookd.schemas.descriptors import RepoTransformerConfig
from webhookd.schemas.events import parse_push_event
from webhookd.services.base import Cancellation, is_cancelled
from webhookd.services.push import has_qualifying_change


class GitHubRepoTransformation:
    """Emit the repository name when a push touches any included file.

    Configured by ``githubrepo://?{PARAMETERS}``, accepting the same exclude
    and prepend flags as ``githubcommits://`` plus ``halt_on_author``.
    Prepended lines take the form ``#message {COMMIT_MESSAGE}`` and
    ``#author {COMMIT_AUTHOR}``.
    """

    def __init__(self, config: RepoTransformerConfig) -> None:
        self._config = config

    @classmethod
    def from_uri(cls, uri: str) -> GitHubRepoTransformation:
        return cls(RepoTransformerConfig.from_uri(uri))

    @property
    def config(self) -> RepoTransformerConfig:
        return self._config

    def transform(self, body: bytes, cancel: Cancellation | None = None) -> bytes | None:
        if is_cancelled(cancel):
            return None

        event = parse_push_event(body)
        config = self._config

        if config.halt_on_author:
            author = event.require_head_commit_author()
            if config.halt_on_author in author:
                raise HaltEvent(f"Commit author contains '{config.halt_on_author}'")

        if not has_qualifying_change(event, config):
            return b""

        lines: list[str] = []

        if config.prepend_message:
            lines.append(f"#message {event.require_head_commit_message()}\n")

        if config.prepend_author:
            lines.append(f"#author {event.require_head_commit_author()}\n")

        lines.append(event.require_repository_name())
        return "".join(lines).encode("utf-8")
