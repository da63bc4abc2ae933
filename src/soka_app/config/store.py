import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from logging import Logger
from typing import Protocol, runtime_checkable

from fastmcp.utilities.logging import get_logger

from soka_app.config.configuration import SokaConfiguration

logger: Logger = get_logger(name=__name__)

ConfigureFunction = Callable[[SokaConfiguration], object]


@runtime_checkable
class ConfigurationSource(Protocol):
    """Anything that can hand out the current configuration."""

    def get(self) -> SokaConfiguration | None: ...


class ConfigurationStore:
    """Holds the process-wide configuration and serializes access to it.

    The record is created lazily from the environment on first access, mutated in place by
    `configure`, and only ever discarded wholesale by `reset` or `replace`."""

    def __init__(self, configuration: SokaConfiguration | None = None):
        self._lock: threading.RLock = threading.RLock()
        self._configuration: SokaConfiguration | None = configuration

    def get(self) -> SokaConfiguration:
        with self._lock:
            if self._configuration is None:
                self._configuration = SokaConfiguration.from_environment()
                logger.debug(f"Built default Soka configuration for provider {self._configuration.provider}")

            return self._configuration

    def configure(self, fn: ConfigureFunction) -> SokaConfiguration:
        """Apply `fn` to the live configuration. Later calls only overwrite the fields they set."""
        with self._lock:
            configuration = self.get()
            fn(configuration)
            return configuration

    def reset(self) -> None:
        with self._lock:
            self._configuration = None

    def replace(self, configuration: SokaConfiguration | None) -> None:
        with self._lock:
            self._configuration = configuration

    @contextmanager
    def override(self, fn: ConfigureFunction | None = None) -> Iterator[SokaConfiguration]:
        """Temporarily swap in a copy of the configuration, restoring the original on exit."""
        with self._lock:
            original: SokaConfiguration | None = self._configuration
            overridden: SokaConfiguration = self.get().copy_configuration()
            self._configuration = overridden

        try:
            if fn is not None:
                self.configure(fn)
            yield overridden
        finally:
            with self._lock:
                self._configuration = original


default_store: ConfigurationStore = ConfigurationStore()


def get_configuration() -> SokaConfiguration:
    return default_store.get()


def configure(fn: ConfigureFunction) -> SokaConfiguration:
    return default_store.configure(fn)


def reset_configuration() -> None:
    default_store.reset()
