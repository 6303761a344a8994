from typing import Any, Mapping, TypeVar

U = TypeVar("U", bound=Mapping[str, Any])


def resolve_config(config: Mapping[str, Any] | None, default_config: U) -> U:
    """Overlay ``config`` onto a copy of ``default_config``.

    Keys the defaults do not know about are rejected rather than ignored, so a
    misspelled option fails loudly.
    """
    _config = dict(default_config)
    if config:
        unknown = sorted(set(config) - set(default_config))
        if unknown:
            raise KeyError(f"Unknown config option(s): {', '.join(unknown)}")
        _config.update(config)
    return _config  # type: ignore[return-value]
