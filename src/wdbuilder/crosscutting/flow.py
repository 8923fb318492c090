"""
Flujo de ejecución (control flow) para la construcción de sesiones.

Un "flow" es cualquier ``concurrent.futures.Executor``: si hay uno vigente,
las factories le delegan la creación de la sesión y devuelven el ``Future``;
si no, se ejecuta en línea y se devuelve la sesión directamente.

El flow "activo" es ambiental (contextvar) y se resuelve al momento del build.
"""
from __future__ import annotations

from concurrent.futures import Executor
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Callable, Iterator, Optional, TypeVar

T = TypeVar("T")

Flow = Executor

_active_flow: ContextVar[Optional[Flow]] = ContextVar("wdbuilder_active_flow", default=None)


def get_active_flow() -> Optional[Flow]:
    """Devuelve el flow ambiental del contexto actual (o None)."""
    return _active_flow.get()


@contextmanager
def use_flow(flow: Optional[Flow]) -> Iterator[Optional[Flow]]:
    """
    Activa `flow` como flow ambiental dentro del bloque.

    Ejemplo:
        with ThreadPoolExecutor(1) as pool, use_flow(pool):
            future = Builder().build()
    """
    token = _active_flow.set(flow)
    try:
        yield flow
    finally:
        _active_flow.reset(token)


def run_in_flow(flow: Optional[Flow], fn: Callable[..., T], *args: Any, **kwargs: Any) -> Any:
    """Ejecuta `fn` en línea (sin flow) o la encola en el flow y devuelve el Future."""
    if flow is None:
        return fn(*args, **kwargs)
    return flow.submit(fn, *args, **kwargs)
