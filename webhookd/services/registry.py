"""Explicit factory tables mapping descriptor schemes to constructors.

Nothing registers itself on import. The application builds the tables at
startup (``default_receivers`` / ``default_transformations``) and passes them
to whatever assembles the pipeline.
"""

from collections.abc import Callable, Mapping
from typing import TypeVar

from webhookd.errors import ConfigurationError
from webhookd.schemas.descriptors import split_descriptor
from webhookd.services.base import Receiver, Transformation
from webhookd.services.commits import GitHubCommitsTransformation
from webhookd.services.receiver import GitHubReceiver
from webhookd.services.repo import GitHubRepoTransformation

ReceiverFactory = Callable[[str], Receiver]
TransformationFactory = Callable[[str], Transformation]

F = TypeVar("F")


def default_receivers() -> dict[str, ReceiverFactory]:
    return {"github": GitHubReceiver.from_uri}


def default_transformations() -> dict[str, TransformationFactory]:
    return {
        "githubcommits": GitHubCommitsTransformation.from_uri,
        "githubrepo": GitHubRepoTransformation.from_uri,
    }


def _lookup(uri: str, factories: Mapping[str, F], kind: str) -> F:
    scheme, _ = split_descriptor(uri)
    try:
        return factories[scheme]
    except KeyError:
        known = ", ".join(sorted(factories)) or "none"
        raise ConfigurationError(f"Unknown {kind} scheme '{scheme}' (known: {known})") from None


def new_receiver(uri: str, factories: Mapping[str, ReceiverFactory]) -> Receiver:
    """Construct the receiver registered for the descriptor's scheme."""
    return _lookup(uri, factories, "receiver")(uri)


def new_transformation(uri: str, factories: Mapping[str, TransformationFactory]) -> Transformation:
    """Construct the transformation registered for the descriptor's scheme."""
    return _lookup(uri, factories, "transformation")(uri)
