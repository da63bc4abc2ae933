import threading

import pytest

from soka_app.config.configuration import SokaConfiguration
from soka_app.config.store import (
    ConfigurationSource,
    ConfigurationStore,
    configure,
    default_store,
    get_configuration,
    reset_configuration,
)


def test_get_builds_defaults_lazily(store: ConfigurationStore):
    configuration = store.get()

    assert configuration.provider == "gemini"
    assert store.get() is configuration


def test_configure_persists_mutations(store: ConfigurationStore):
    store.configure(lambda configuration: configuration.ai(lambda ai: setattr(ai, "provider", "anthropic")))

    assert store.get().provider == "anthropic"


def test_configure_is_cumulative_per_field(store: ConfigurationStore):
    store.configure(lambda configuration: setattr(configuration, "model", "gpt-4"))
    store.configure(lambda configuration: setattr(configuration, "timeout", 60))

    assert store.get().model == "gpt-4"
    assert store.get().timeout == 60


def test_configure_later_call_wins(store: ConfigurationStore):
    store.configure(lambda configuration: setattr(configuration, "model", "gpt-4"))
    store.configure(lambda configuration: setattr(configuration, "model", "gpt-5-mini"))

    assert store.get().model == "gpt-5-mini"


def test_reset_rebuilds_defaults(store: ConfigurationStore, monkeypatch: pytest.MonkeyPatch):
    store.configure(lambda configuration: setattr(configuration, "provider", "anthropic"))
    original = store.get()

    monkeypatch.setenv("SOKA_PROVIDER", "openai")
    store.reset()

    assert store.get() is not original
    assert store.get().provider == "openai"
    assert original.provider == "anthropic"


def test_replace(store: ConfigurationStore):
    replacement = SokaConfiguration(provider="mock")

    store.replace(replacement)

    assert store.get() is replacement


def test_override_restores_configuration(store: ConfigurationStore):
    original = store.get()

    with store.override(lambda configuration: setattr(configuration, "provider", "mock")) as overridden:
        assert store.get() is overridden
        assert overridden.provider == "mock"

    assert store.get() is original
    assert original.provider == "gemini"


def test_override_restores_configuration_on_error(store: ConfigurationStore):
    original = store.get()

    with pytest.raises(RuntimeError), store.override():
        store.configure(lambda configuration: setattr(configuration, "provider", "openai"))
        raise RuntimeError

    assert store.get() is original
    assert original.provider == "gemini"


def test_configure_is_serialized(store: ConfigurationStore):
    store.configure(lambda configuration: setattr(configuration, "max_iterations", 1))

    def increment(configuration: SokaConfiguration) -> None:
        current = configuration.max_iterations or 0
        configuration.max_iterations = current + 1

    threads = [threading.Thread(target=lambda: [store.configure(increment) for _ in range(50)]) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert store.get().max_iterations == 1 + 8 * 50


def test_store_is_a_configuration_source(store: ConfigurationStore):
    assert isinstance(store, ConfigurationSource)


def test_default_store_functions():
    configure(lambda configuration: setattr(configuration, "api_key", "test-key"))

    assert get_configuration() is default_store.get()
    assert get_configuration().api_key == "test-key"

    reset_configuration()

    assert get_configuration().api_key is None
