"""Tests for provider wiring."""

from mcprovider.client.graphql import MonteCarloClient
from mcprovider.core.config import Settings
from mcprovider.provider import MonteCarloProvider


def _settings(**overrides):
    values = {"mc_api_key_id": "id", "mc_api_key_token": "token"}
    values.update(overrides)
    return Settings(**values)


def test_resources_keyed_by_type_name():
    provider = MonteCarloProvider(settings=_settings(provider_type_name="mc"))
    assert list(provider.resources()) == ["mc_transactional_warehouse"]


def test_configure_builds_client_from_settings():
    provider = MonteCarloProvider(settings=_settings(mc_api_url="https://mc.test/graphql"))

    diags = provider.configure()

    assert not diags
    assert isinstance(provider.client, MonteCarloClient)
    assert provider.client.api_url == "https://mc.test/graphql"
    resource = provider.resources()["montecarlo_transactional_warehouse"]
    assert resource.client is provider.client
    provider.close()
    assert provider.client is None


def test_configure_with_given_client(mock_client):
    provider = MonteCarloProvider(settings=_settings())

    provider.configure(mock_client)

    assert provider.resources()["montecarlo_transactional_warehouse"].client is mock_client
