"""Tests for environment-driven settings and pipeline dependency wiring."""

import pytest

from webhookd import dependencies
from webhookd.config import Settings
from webhookd.errors import ConfigurationError
from webhookd.services.repo import GitHubRepoTransformation


def test_defaults() -> None:
    settings = Settings(_env_file=None)
    assert settings.receiver_uri == "github://"
    assert settings.transformation_uri_list == ["githubcommits://"]


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WEBHOOKD_RECEIVER_URI", "github://?secret=abc")
    monkeypatch.setenv("WEBHOOKD_TRANSFORMATION_URIS", "githubcommits://, githubrepo://?prepend_author=true ,")
    settings = Settings(_env_file=None)

    assert settings.receiver_uri == "github://?secret=abc"
    assert settings.transformation_uri_list == ["githubcommits://", "githubrepo://?prepend_author=true"]


def test_init_pipeline_installs_pipeline(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(dependencies, "_pipeline", None)

    pipeline = dependencies.init_pipeline("github://?secret=abc", ["githubrepo://"])

    assert dependencies.get_pipeline() is pipeline
    assert isinstance(pipeline.transformations[0], GitHubRepoTransformation)


def test_init_pipeline_rejects_bad_descriptor(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(dependencies, "_pipeline", None)

    with pytest.raises(ConfigurationError):
        dependencies.init_pipeline("github://", ["githubcommits://?exclude_additions=nope"])


def test_configure_logging_installs_single_handler() -> None:
    import logging

    import structlog

    from webhookd.logging_config import configure_logging

    configure_logging(json_logs=False, log_level="debug")

    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)
    assert root.level == logging.DEBUG
    assert logging.getLogger("uvicorn.access").propagate is True
