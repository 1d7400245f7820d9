"""Base classes for configuration and runtime state models.

Everything that owns a resource (log files, span processors) hangs
off a BaseCloseable model, so closing the top-level State walks the
tree and releases every child:

    State.config.close() → Logger.close() → Sink.close()

Kept separate from config.py so that log.py can depend on it
without a circular import.
"""

from __future__ import annotations

import sys
from typing import Protocol, runtime_checkable

from pydantic import BaseModel


@runtime_checkable
class Closeable(Protocol):
    """Anything exposing close()."""

    def close(self) -> None:
        ...


class BaseCloseable(BaseModel):
    """Pydantic model that closes its Closeable fields.

    Usable as a context manager. A child whose close() raises is
    reported on stderr and the remaining children are still closed.
    """

    def close(self):
        for field_name in self.__class__.model_fields:
            child = getattr(self, field_name, None)
            if child is None or not isinstance(child, Closeable):
                continue
            try:
                child.close()
            except Exception as e:
                print(
                    f"Warning: error closing {field_name}: {e}",
                    file=sys.stderr,
                )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):  # noqa: U100
        self.close()
        return False


class BaseConfig(BaseCloseable):
    """Marker base for configuration sections (YAML/env/CLI)."""


class BaseState(BaseCloseable):
    """Marker base for runtime sections mutated by the workflow."""


__all__ = ["Closeable", "BaseCloseable", "BaseConfig", "BaseState"]
