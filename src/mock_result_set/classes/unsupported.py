from __future__ import annotations
from typing import Any, Callable, NoReturn

from ..exceptions import UnsupportedOperation


class UnsupportedOperationsMixin(object):
    """Answers every name in [_unsupported_operations] with a method that raises UnsupportedOperation.

    Subclasses list the operation names of the cursor interface they do not implement; calling any of them
    (with any arguments) fails. Names that are neither implemented nor listed raise AttributeError as usual.
    """

    _unsupported_operations:frozenset[str] = frozenset()

    def _on_unsupported(self, operation:str, exception:UnsupportedOperation) -> None:
        """Hook called right before an UnsupportedOperation is raised (e.g. for logging)."""


    def _raise_unsupported(self, operation:str) -> NoReturn:
        exc = UnsupportedOperation(operation)
        self._on_unsupported(operation, exc)
        raise exc


    def __getattr__(self, name:str) -> Callable[..., Any]:
        # NOTE: only called for names not found through normal lookup
        if name in type(self)._unsupported_operations:
            def unsupported(*args, **kwargs) -> NoReturn:
                self._raise_unsupported(name)
            unsupported.__name__ = name
            return unsupported
        raise AttributeError(f'{type(self).__name__!r} object has no attribute {name!r}')
