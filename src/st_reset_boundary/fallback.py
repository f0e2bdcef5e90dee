"""Fallback styles and their resolution."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

from .errors import FallbackConfigurationError


class ResetFn(Protocol):
    def __call__(self, *args: Any) -> None: ...


@dataclass(frozen=True, slots=True)
class FallbackProps:
    """What a fallback receives while the boundary is armed.

    ``key`` is the boundary's session-state key, handy for keying widgets so
    several boundaries can show fallbacks side by side.
    """

    error: Exception
    reset_error_boundary: ResetFn
    key: str = "error_boundary"


class FallbackComponentFactory(Protocol):
    def __call__(self, *, error: Exception, reset_error_boundary: ResetFn, key: str) -> Any: ...


@dataclass(frozen=True, slots=True)
class StaticFallback:
    value: Any


@dataclass(frozen=True, slots=True)
class RenderFallback:
    render: Callable[[FallbackProps], Any]


@dataclass(frozen=True, slots=True)
class ComponentFallback:
    component: FallbackComponentFactory


type FallbackSpec = StaticFallback | RenderFallback | ComponentFallback


def fallback_spec(
    fallback: Any = None,
    fallback_render: Callable[[FallbackProps], Any] | None = None,
    fallback_component: FallbackComponentFactory | None = None,
) -> FallbackSpec | None:
    """Pick the one fallback style in effect.

    A static ``fallback`` wins over ``fallback_render``, which wins over
    ``fallback_component``. ``None`` means nothing usable was supplied.
    """
    if fallback is not None:
        return StaticFallback(fallback)
    if callable(fallback_render):
        return RenderFallback(fallback_render)
    if fallback_component is not None:
        return ComponentFallback(fallback_component)
    return None


def resolve_fallback(spec: FallbackSpec | None, props: FallbackProps) -> Any:
    match spec:
        case StaticFallback(value):
            return value
        case RenderFallback(render):
            return render(props)
        case ComponentFallback(component):
            return component(error=props.error, reset_error_boundary=props.reset_error_boundary, key=props.key)
        case _:
            raise FallbackConfigurationError
