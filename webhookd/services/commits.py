"""Transform GitHub push events into per-file CSV rows.

Each output row is ``commit_hash,repository_name,path`` where the hash is
the head commit's id. Optional header rows take the form
``#message,{COMMIT_MESSAGE},`` and ``#author,{COMMIT_AUTHOR},``.
"""

from __future__ import annotations

import csv
import io

from webhookd.errors import HaltEvent
from webhookd.schemas.descriptors import CommitsTransformerConfig
from webhookd.schemas.events import parse_push_event
from webhookd.services.base import Cancellation, is_cancelled
from webhookd.services.push import changed_paths


class GitHubCommitsTransformation:
    """Flatten a push event into ``(hash, repo, path)`` CSV rows.

    Configured by ``githubcommits://?{PARAMETERS}`` where the parameters are:

    * ``exclude_additions``: leave newly added files out of the output.
    * ``exclude_modifications``: leave modified files out of the output.
    * ``exclude_deletions``: leave deleted files out of the output.
    * ``prepend_message``: start with a ``#message`` row holding the head commit message.
    * ``prepend_author``: add an ``#author`` row holding the head commit author name.
    * ``halt_on_message``: halt the event when the head commit message contains this text.
    """

    def __init__(self, config: CommitsTransformerConfig) -> None:
        self._config = config

    @classmethod
    def from_uri(cls, uri: str) -> GitHubCommitsTransformation:
        return cls(CommitsTransformerConfig.from_uri(uri))

    @property
    def config(self) -> CommitsTransformerConfig:
        return self._config

    def transform(self, body: bytes, cancel: Cancellation | None = None) -> bytes | None:
        """Transform a push event body into CSV bytes.

        An event with no included changes yields ``b""``.

        Raises:
            PayloadParseError: Body is not a push event, or a needed field is absent.
            HaltEvent: ``halt_on_message`` matched the head commit message.
        """
        if is_cancelled(cancel):
            return None

        event = parse_push_event(body)
        config = self._config

        if config.halt_on_message:
            message = event.require_head_commit_message()
            if config.halt_on_message in message:
                raise HaltEvent(f"Commit message contains '{config.halt_on_message}'")

        rows: list[list[str]] = []

        if config.prepend_message:
            rows.append(["#message", event.require_head_commit_message(), ""])

        if config.prepend_author:
            rows.append(["#author", event.require_head_commit_author(), ""])

        paths = list(changed_paths(event, config))
        if paths:
            commit_hash = event.require_head_commit_id()
            repo_name = event.require_repository_name()
            rows.extend([commit_hash, repo_name, path] for path in paths)

        buf = io.StringIO()
        writer = csv.writer(buf, lineterminator="\n")
        writer.writerows(rows)
        return buf.getvalue().encode("utf-8")
