"""
Core connection manager (prototype).
"""

import abc
from contextlib import contextmanager
from typing import Any, Iterator

from pydantic import BaseModel


class CoreConnectionManager(BaseModel, abc.ABC):
    """
    Prototype for connection management. Each call to connection() opens a
    fresh, authenticated session to the remote host and tears it down when
    the block exits, however it exits. Sessions are never pooled or reused.
    """

    @abc.abstractmethod
    def open(self) -> Any:
        """
        Open and authenticate a session. Errors propagate to the caller.
        """
        raise NotImplementedError

    @abc.abstractmethod
    def close(self, session: Any):
        """
        Best-effort teardown of a session. Must not raise.
        """
        raise NotImplementedError

    @contextmanager
    def connection(self) -> Iterator[Any]:
        """
        Yield a live session, closing it afterwards.
        """

        session = self.open()

        try:
            yield session
        finally:
            self.close(session)
