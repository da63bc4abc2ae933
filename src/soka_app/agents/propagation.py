import types
from logging import Logger
from typing import Any, ClassVar, Protocol

from fastmcp.utilities.logging import get_logger

from soka_app.config.configuration import SokaConfiguration
from soka_app.config.store import ConfigurationSource, default_store

logger: Logger = get_logger(name=__name__)

PROPAGATED_SETTINGS: tuple[str, ...] = ("provider", "model", "api_key", "max_iterations")


class AgentSettingsTarget(Protocol):
    """The class-level setters a Soka agent type exposes to receive its settings."""

    @classmethod
    def provider(cls, value: str) -> Any: ...

    @classmethod
    def model(cls, value: str) -> Any: ...

    @classmethod
    def api_key(cls, value: str) -> Any: ...

    @classmethod
    def max_iterations(cls, value: int) -> Any: ...


def apply_configuration(target: type[AgentSettingsTarget] | type, source: ConfigurationSource | None) -> None:
    """Copy the current configuration onto `target` by calling its class-level setters.

    Unset fields are skipped so the target keeps its own defaults. Nothing happens when there is
    no source or the source has no configuration, and the values are copied, not bound: later
    configuration changes do not reach `target`."""

    if source is None:
        return

    configuration: SokaConfiguration | None = source.get()

    if configuration is None:
        return

    for setting in PROPAGATED_SETTINGS:
        value = getattr(configuration, setting)

        if value is None or value == "":
            continue

        setter = getattr(target, setting, None)

        if not callable(setter):
            logger.warning(f"{target.__name__} has no {setting} setter, skipping the configured value.")
            continue

        setter(value)

    logger.debug(f"Applied Soka configuration to {target.__name__} (provider: {configuration.provider}, model: {configuration.model})")


class ConfigurationPropagation:
    """Mix into an agent base class to configure every subclass when it is defined.

    Set `configuration_source` to another store (or `None` to disable) on the base class, and pass
    `propagate=False` in the class statement to skip a single class."""

    configuration_source: ClassVar[ConfigurationSource | None] = default_store

    def __init_subclass__(cls, propagate: bool = True, **kwargs: Any):
        super().__init_subclass__(**kwargs)

        if propagate:
            apply_configuration(target=cls, source=cls.configuration_source)


def extend_agent_base(base: type | None, source: ConfigurationSource | None = default_store) -> type | None:
    """Return `base` with the propagation hook mixed in, or `None` when there is no base to extend."""

    if base is None:
        logger.debug("No Soka agent base class available, configuration propagation is disabled.")
        return None

    return types.new_class(
        base.__name__,
        (ConfigurationPropagation, base),
        {"propagate": False},
        lambda namespace: namespace.update({"configuration_source": source, "__module__": base.__module__}),
    )


def define_agent(
    name: str,
    base: type,
    namespace: dict[str, Any] | None = None,
    source: ConfigurationSource | None = default_store,
) -> type:
    """Define a new agent type deriving from `base` and apply the configuration to it.

    When `base` already carries the propagation hook, the hook configures the new type from the
    base's own `configuration_source` and `source` is ignored."""

    agent_class: type = types.new_class(name, (base,), {}, lambda body: body.update(namespace or {}))

    if not issubclass(agent_class, ConfigurationPropagation):
        apply_configuration(target=agent_class, source=source)

    return agent_class
