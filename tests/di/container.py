"""Test container builder with selective unmocking."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider

from hublink.util.di import PROVIDERS, Component, get_provider


def build_test_container(unmock: set[Component] | None = None) -> AsyncContainer:
    """Build a container with mocked infrastructure.

    Concrete providers (config, domain, application) are always real.
    Mockable components use their mock unless named in ``unmock``.

    Examples:
        # Unit tests - in-memory persistence, mock GitHub
        container = build_test_container()

        # Integration tests - real PostgreSQL (DATABASE__URL), mock GitHub
        container = build_test_container(unmock={"persistence"})

    Raises:
        ValueError: If ``unmock`` names an unknown component
    """
    unmock = unmock or set()
    _validate_unmock(unmock)

    provider_instances = []
    for base in PROVIDERS:
        component_name = getattr(base, "__mock_component__", None)
        use_mock = bool(base.__subclasses__()) and component_name not in unmock
        provider_instances.append(get_provider(base, use_mock=use_mock)())

    return make_async_container(*provider_instances, FastapiProvider())


def _validate_unmock(unmock: set[Component]) -> None:
    components = {
        getattr(base, "__mock_component__")
        for base in PROVIDERS
        if base.__subclasses__() and hasattr(base, "__mock_component__")
    }

    unknown = unmock - components
    if unknown:
        raise ValueError(f"Unknown components: {unknown}")
