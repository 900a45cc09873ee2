"""MoxieDash web application package.

``persistence`` is imported eagerly; the FastAPI ``application`` module is
loaded on first attribute access so the storage layer can be used without
building the app.
"""
from __future__ import annotations

from importlib import import_module
from types import ModuleType
from typing import Any, List

_WEB_MODULES = {"fastapi", "starlette", "sqlmodel", "sqlalchemy", "dotenv"}
_IMPL_MODULE: ModuleType | None = None

try:
    from . import persistence as _persistence
except ModuleNotFoundError as exc:  # pragma: no cover - install guard
    if exc.name in _WEB_MODULES:
        raise RuntimeError(
            "moxiedash.webapp requires the FastAPI/SQLModel dependencies. "
            "Install them via `pip install -e .`."
        ) from exc
    raise

persistence = _persistence
__all__: List[str] = list(getattr(_persistence, "__all__", ()))


def _load_impl() -> ModuleType:
    global _IMPL_MODULE
    if _IMPL_MODULE is not None:
        return _IMPL_MODULE
    module = import_module(".application", __name__)
    _IMPL_MODULE = module
    module_all = getattr(module, "__all__", ())
    __all__.extend(name for name in module_all if name not in __all__)
    return module


def __getattr__(name: str) -> Any:
    if hasattr(_persistence, name):
        return getattr(_persistence, name)
    module = _load_impl()
    if name == "application":
        return module
    try:
        return getattr(module, name)
    except AttributeError as exc:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}") from exc


def __dir__() -> List[str]:
    return sorted(set(globals()) | set(__all__) | set(dir(_load_impl())))
