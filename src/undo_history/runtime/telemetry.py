"""telelog-backed logging for the history layer.

``configure(preset=...)`` -- rebuild loggers from a named preset or the environment
``get_logger(name)`` -- cached ``telelog.Logger`` per name
``record_event(name, ...)`` -- one structured ``event::<name>`` line
``span(name, ...)`` -- profiled block, optionally tracked as a component
"""

from __future__ import annotations

from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, Optional, Tuple, cast

import telelog  # type: ignore[import]

from .config import env, env_flag, env_int

tl = cast(Any, telelog)

DEFAULT_LOGGER_NAME = env("LOGGER") or "undo_history"

# name -> (min level, console output)
PRESETS: Dict[str, Tuple[str, bool]] = {
    # history.trim / history.evict / history.clear are logged at debug
    "trace": ("DEBUG", True),
    # UI hosts and the test suite: only span failures get through
    "quiet": ("ERROR", False),
}

_loggers: Dict[str, Any] = {}
_config: Optional[Any] = None


def _from_environment() -> Any:
    config = tl.Config()
    config.with_min_level((env("LOG_LEVEL") or "INFO").upper())
    console = not env_flag("DISABLE_CONSOLE", False)
    config.with_console_output(console)
    if console:
        config.with_colored_output(not env_flag("NO_COLOR", False))
    if env_flag("LOG_JSON", False):
        config.with_json_format(True)
    log_file = env("LOG_FILE")
    if log_file:
        config.with_file_output(log_file)
    if env_flag("LOG_BUFFERED", False):
        config.with_buffering(True)
        config.with_buffer_size(env_int("LOG_BUFFER_SIZE", 2048, minimum=1))
    return config


def _from_preset(preset: str) -> Any:
    try:
        level, console = PRESETS[preset.lower()]
    except KeyError as exc:
        raise ValueError(
            f"Unknown preset '{preset}', expected one of {sorted(PRESETS)}"
        ) from exc
    config = tl.Config()
    config.with_min_level(level)
    config.with_console_output(console)
    if console:
        config.with_colored_output(not env_flag("NO_COLOR", False))
    return config


def configure(*, preset: Optional[str] = None) -> None:
    """Rebuild every logger from ``preset``, or from ``UNDO_HISTORY_*`` settings."""

    global _config
    config = _from_preset(preset) if preset else _from_environment()
    config.with_profiling(True)
    _config = config
    _loggers.clear()


def get_logger(name: Optional[str] = None) -> Any:
    if _config is None:
        configure()
    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _loggers:
        _loggers[logger_name] = tl.Logger.with_config(logger_name, _config)
    return _loggers[logger_name]


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _write(log: Any, level: str, message: str, fields: Dict[str, Any]) -> None:
    """Log ``fields`` as pairs when telelog offers ``<level>_with``."""

    structured: Optional[Callable[..., None]] = getattr(log, f"{level}_with", None)
    if structured is not None:
        structured(message, [(str(key), _text(value)) for key, value in fields.items()])
        return
    plain = getattr(log, level, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {fields}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    _write(
        get_logger(logger_name),
        level.lower(),
        f"event::{name}",
        {"event": name, **(data or {})},
    )


@dataclass
class SpanHandle:
    """Lets the profiled block attach details reported if it fails."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def fail(self, reason: str) -> None:
        fields: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            fields["component"] = self.component_name
        fields["reason"] = reason
        _write(self.logger, "error", "span::fail", fields)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block under ``name``.

    ``component=True`` tracks the block as a component of the same name, a
    string names the component explicitly. ``metadata`` is pushed as logger
    context for the duration of the block.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else component or None
    context = {key: _text(value) for key, value in (metadata or {}).items()}

    with ExitStack() as stack:
        for key, value in context.items():
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))

        handle = SpanHandle(
            logger=log,
            span_name=name,
            component_name=component_name,
            metadata=dict(context),
        )
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


__all__ = [
    "PRESETS",
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
