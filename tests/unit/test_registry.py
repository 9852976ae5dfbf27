from __future__ import annotations

import pytest

from simpleprint.formatter import render
from simpleprint.registry import RendererRegistry, get_default_registry, register_renderer
from simpleprint.value_model import Shape, adapt_value


class Point:
    def __init__(self, x: int, y: int) -> None:
        self.x = x
        self.y = y


class Point3(Point):
    def __init__(self, x: int, y: int, z: int) -> None:
        super().__init__(x, y)
        self.z = z


def _render_point(p: Point) -> str:
    return f"({p.x}, {p.y})"


@pytest.mark.unit
def test_register_and_resolve(registry: RendererRegistry):
    registry.register(Point, _render_point)
    assert registry.resolve(Point) is _render_point
    assert Point in registry
    assert len(registry) == 1
    assert registry.resolve(int) is None


@pytest.mark.unit
def test_resolution_walks_the_mro(registry: RendererRegistry):
    registry.register(Point, _render_point)
    assert registry.resolve(Point3) is _render_point

    registry.register(Point3, lambda p: f"({p.x}, {p.y}, {p.z})")
    assert adapt_value(Point3(1, 2, 3), registry=registry).render() == "(1, 2, 3)"


@pytest.mark.unit
def test_decorator_registration(registry: RendererRegistry):
    @registry.renderer(Point)
    def _fmt(p: Point) -> str:
        return f"P{p.x}"

    assert render("{}", Point(4, 5), registry=registry) == "P4"


@pytest.mark.unit
def test_child_registry_falls_back_to_parent(registry: RendererRegistry):
    registry.register(Point, _render_point)
    child = registry.child()
    assert child.resolve(Point) is _render_point

    child.register(Point, lambda p: "child")
    assert child.resolve(Point)(Point(0, 0)) == "child"
    assert registry.resolve(Point) is _render_point


@pytest.mark.unit
def test_registered_renderer_overrides_builtin_shape(registry: RendererRegistry):
    registry.register(bool, lambda b: "yes" if b else "no")
    adapted = adapt_value(True, registry=registry)
    assert adapted.shape is Shape.CUSTOM
    assert render("{} {}", True, 1, registry=registry) == "yes 1"


@pytest.mark.unit
def test_custom_types_inside_containers(registry: RendererRegistry):
    registry.register(Point, _render_point)
    assert render("{}", [Point(1, 2)], registry=registry) == "vector( (1, 2))"
    assert render("{}", {"o": Point(0, 0)}, registry=registry) == "map( {o, (0, 0)} )"


@pytest.mark.unit
def test_unregister(registry: RendererRegistry):
    registry.register(Point, _render_point)
    registry.unregister(Point)
    registry.unregister(Point)
    assert registry.resolve(Point) is None


@pytest.mark.unit
def test_register_rejects_bad_arguments(registry: RendererRegistry):
    with pytest.raises(TypeError):
        registry.register("Point", _render_point)  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        registry.register(Point, "not callable")  # type: ignore[arg-type]


@pytest.mark.unit
def test_default_registry_helpers():
    default = get_default_registry()
    try:
        register_renderer(Point, _render_point)
        assert render("{}", Point(1, 1)) == "(1, 1)"

        @register_renderer(Point3)
        def _render_point3(p: Point3) -> str:
            return "p3"

        assert render("{}", Point3(1, 1, 1)) == "p3"
    finally:
        default.unregister(Point)
        default.unregister(Point3)
