"""Registry of caller-supplied renderers for custom value types."""

from __future__ import annotations

from typing import Any, Callable, TypeVar
import logging

logger = logging.getLogger(__name__)

RenderFn = Callable[[Any], str]
T = TypeVar("T")


class RendererRegistry:
    """Maps Python types to render functions, resolved along the MRO."""

    def __init__(self, parent: "RendererRegistry | None" = None) -> None:
        self.parent = parent
        self._renderers: dict[type, RenderFn] = {}

    def register(self, type_: type, render_fn: RenderFn) -> None:
        if not isinstance(type_, type):
            raise TypeError(f"Expected a type, got {type_!r}")
        if not callable(render_fn):
            raise TypeError(f"Renderer for {type_.__name__} is not callable")
        if type_ in self._renderers:
            logger.debug("Replacing renderer for %s", type_.__qualname__)
        self._renderers[type_] = render_fn

    def unregister(self, type_: type) -> None:
        self._renderers.pop(type_, None)

    def renderer(self, type_: type) -> Callable[[Callable[[T], str]], Callable[[T], str]]:
        """Decorator form of :meth:`register`."""

        def _decorator(render_fn: Callable[[T], str]) -> Callable[[T], str]:
            self.register(type_, render_fn)
            return render_fn

        return _decorator

    def resolve(self, type_: type) -> RenderFn | None:
        """Return the renderer for the closest registered base of ``type_``."""
        for base in type_.__mro__:
            render_fn = self._renderers.get(base)
            if render_fn is not None:
                return render_fn
        if self.parent is not None:
            return self.parent.resolve(type_)
        return None

    def child(self) -> "RendererRegistry":
        """Return a registry that falls back to this one."""
        return RendererRegistry(parent=self)

    def __contains__(self, type_: type) -> bool:
        return self.resolve(type_) is not None

    def __len__(self) -> int:
        return len(self._renderers)


_default_registry = RendererRegistry()


def get_default_registry() -> RendererRegistry:
    return _default_registry


def register_renderer(type_: type, render_fn: RenderFn | None = None):
    """Register a renderer on the default registry.

    Usable directly, ``register_renderer(Point, render_point)``, or as a
    decorator, ``@register_renderer(Point)``.
    """
    if render_fn is None:
        return _default_registry.renderer(type_)
    _default_registry.register(type_, render_fn)
    return render_fn
