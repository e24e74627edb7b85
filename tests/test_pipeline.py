"""Tests for the factory tables and pipeline assembly."""

import asyncio
from collections.abc import Callable

import pytest
from starlette.requests import Request

from webhookd.errors import ConfigurationError, HaltEvent
from webhookd.services.commits import GitHubCommitsTransformation
from webhookd.services.pipeline import WebhookPipeline, build_pipeline
from webhookd.services.receiver import GitHubReceiver
from webhookd.services.registry import (
    default_receivers,
    default_transformations,
    new_receiver,
    new_transformation,
)
from webhookd.services.repo import GitHubRepoTransformation
from webhookd.services.signature import sign

WEBHOOK_SECRET = "s33kret"


def _signed(make_request: Callable[..., Request], body: bytes) -> Request:
    return make_request(
        headers={"X-GitHub-Event": "push", "X-Hub-Signature": sign(body, WEBHOOK_SECRET)},
        body=body,
    )


class TestRegistry:
    def test_default_schemes(self) -> None:
        assert set(default_receivers()) == {"github"}
        assert set(default_transformations()) == {"githubcommits", "githubrepo"}

    def test_new_receiver(self) -> None:
        receiver = new_receiver("github://?secret=abc", default_receivers())
        assert isinstance(receiver, GitHubReceiver)
        assert receiver.config.secret == "abc"

    def test_new_transformations(self) -> None:
        table = default_transformations()
        assert isinstance(new_transformation("githubcommits://", table), GitHubCommitsTransformation)
        assert isinstance(new_transformation("githubrepo://", table), GitHubRepoTransformation)

    def test_unknown_scheme(self) -> None:
        with pytest.raises(ConfigurationError, match="slack"):
            new_receiver("slack://", default_receivers())

    def test_custom_table(self) -> None:
        table = {"commits": GitHubCommitsTransformation.from_uri}
        assert isinstance(new_transformation("commits://", table), GitHubCommitsTransformation)
        with pytest.raises(ConfigurationError):
            new_transformation("githubcommits://", table)

    def test_invalid_descriptor_fails_at_construction(self) -> None:
        with pytest.raises(ConfigurationError):
            new_transformation("githubrepo://?prepend_author=sure", default_transformations())


class TestPipeline:
    def test_build(self) -> None:
        pipeline = build_pipeline("github://", ["githubcommits://", "githubrepo://"])
        assert isinstance(pipeline.receiver, GitHubReceiver)
        assert [type(t) for t in pipeline.transformations] == [
            GitHubCommitsTransformation,
            GitHubRepoTransformation,
        ]

    @pytest.mark.anyio
    async def test_receiver_only_returns_body(self, make_request, push_body: bytes) -> None:
        pipeline = build_pipeline(f"github://?secret={WEBHOOK_SECRET}")
        assert await pipeline.run(_signed(make_request, push_body)) == push_body

    @pytest.mark.anyio
    async def test_runs_transformation(self, make_request, flights_body: bytes) -> None:
        pipeline = build_pipeline(f"github://?secret={WEBHOOK_SECRET}", ["githubrepo://"])
        assert await pipeline.run(_signed(make_request, flights_body)) == b"sfomuseum-data-flights-2020-05"

    @pytest.mark.anyio
    async def test_halt_propagates(self, make_request, flights_body: bytes) -> None:
        pipeline = build_pipeline(
            f"github://?secret={WEBHOOK_SECRET}", ["githubcommits://?halt_on_message=SWIM"],
        )
        with pytest.raises(HaltEvent):
            await pipeline.run(_signed(make_request, flights_body))

    @pytest.mark.anyio
    async def test_cancelled(self, make_request, flights_body: bytes) -> None:
        pipeline = WebhookPipeline(
            receiver=GitHubReceiver.from_uri(f"github://?secret={WEBHOOK_SECRET}"),
            transformations=(GitHubRepoTransformation.from_uri("githubrepo://"),),
        )
        cancel = asyncio.Event()
        cancel.set()
        assert await pipeline.run(_signed(make_request, flights_body), cancel) is None
