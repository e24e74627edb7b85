"""Pydantic models for GitHub push webhook payloads.

Every field GitHub may omit (or send as ``null`` on non-push events) is
optional here. Reads go through the ``require_*`` accessors, which raise
``PayloadParseError`` naming the missing field instead of handing back an
empty value.

Reference: https://docs.github.com/en/webhooks/webhook-events-and-payloads#push
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from webhookd.errors import PayloadParseError


class _EventModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class CommitAuthor(_EventModel):
    """Author information from a Git commit."""

    name: str | None = None
    email: str | None = None
    username: str | None = None


class Commit(_EventModel):
    """A single commit within a GitHub push event."""

    id: str | None = None
    message: str | None = None
    author: CommitAuthor | None = None
    added: list[str] = Field(default_factory=list)
    modified: list[str] = Field(default_factory=list)
    removed: list[str] = Field(default_factory=list)

    @field_validator("added", "modified", "removed", mode="before")
    @classmethod
    def _null_as_empty(cls, value: object) -> object:
        return [] if value is None else value


class Repository(_EventModel):
    """Repository metadata from the webhook payload."""

    name: str | None = None
    full_name: str | None = None


class PushEvent(_EventModel):
    """GitHub push webhook event payload."""

    ref: str | None = None
    before: str | None = None
    after: str | None = None
    repository: Repository | None = None
    head_commit: Commit | None = None
    commits: list[Commit] = Field(default_factory=list)

    @field_validator("commits", mode="before")
    @classmethod
    def _null_commits_as_empty(cls, value: object) -> object:
        return [] if value is None else value

    def require_ref(self) -> str:
        if self.ref is None:
            raise _missing("ref")
        return self.ref

    def require_repository_name(self) -> str:
        if self.repository is None:
            raise _missing("repository")
        if self.repository.name is None:
            raise _missing("repository.name")
        return self.repository.name

    def require_head_commit(self) -> Commit:
        if self.head_commit is None:
            raise _missing("head_commit")
        return self.head_commit

    def require_head_commit_id(self) -> str:
        commit = self.require_head_commit()
        if commit.id is None:
            raise _missing("head_commit.id")
        return commit.id

    def require_head_commit_message(self) -> str:
        commit = self.require_head_commit()
        if commit.message is None:
            raise _missing("head_commit.message")
        return commit.message

    def require_head_commit_author(self) -> str:
        """Return the head commit author's name."""
        commit = self.require_head_commit()
        if commit.author is None:
            raise _missing("head_commit.author")
        if commit.author.name is None:
            raise _missing("head_commit.author.name")
        return commit.author.name


def _missing(field: str) -> PayloadParseError:
    return PayloadParseError(f"Push event is missing required field '{field}'")


def parse_push_event(body: bytes) -> PushEvent:
    """Parse a raw webhook body as a ``PushEvent``.

    Raises:
        PayloadParseError: If the body is not valid JSON or does not match the schema.
    """
    try:
        return PushEvent.model_validate_json(body)
    except ValidationError as exc:
        raise PayloadParseError(str(exc)) from exc
