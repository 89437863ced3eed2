"""One-shot completion channel assembling session output."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from .exceptions import CompletionError, RenderTimeoutError


if TYPE_CHECKING:  # pragma: no cover - typing only
    from .session import DocumentSession


class CompletionChannel:
    """Deliver the final byte sequence of a render exactly once."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop or asyncio.get_running_loop()
        self._future: asyncio.Future[bytes] = self._loop.create_future()
        self._closed = False

    @property
    def done(self) -> bool:
        return self._future.done()

    @property
    def closed(self) -> bool:
        return self._closed

    def fulfil(self, payload: bytes) -> None:
        """Resolve the channel with the assembled output."""
        if self._future.done():
            raise CompletionError("Completion channel already settled.")
        self._future.set_result(payload)

    def fail(self, exc: BaseException) -> None:
        """Resolve the channel with an error raised while producing output."""
        if self._future.done():
            raise CompletionError("Completion channel already settled.")
        self._future.set_exception(exc)

    def close(self) -> None:
        """Settle the channel without a result; waiters get a CompletionError."""
        self._closed = True
        if not self._future.done():
            self._future.cancel()

    async def wait(self, timeout: float | None = None) -> bytes:
        """Suspend until the channel settles, honouring ``timeout`` seconds."""
        shielded = asyncio.shield(self._future)
        try:
            if timeout is None:
                return await shielded
            return await asyncio.wait_for(shielded, timeout)
        except asyncio.TimeoutError as exc:
            raise RenderTimeoutError(f"Document output not completed within {timeout} seconds.") from exc
        except asyncio.CancelledError:
            if self._closed:
                raise CompletionError("Completion channel closed before output was produced.") from None
            raise


class OutputCollector:
    """Accumulate session ``data`` chunks and settle a channel on ``end``."""

    def __init__(self, session: DocumentSession, channel: CompletionChannel) -> None:
        self.channel = channel
        self._chunks: list[bytes] = []
        session.on("data", self._on_data).on("end", self._on_end).on("error", self._on_error)

    @property
    def received(self) -> int:
        return sum(len(chunk) for chunk in self._chunks)

    def _on_data(self, chunk: bytes) -> None:
        self._chunks.append(bytes(chunk))

    def _on_end(self) -> None:
        self.channel.fulfil(b"".join(self._chunks))

    def _on_error(self, exc: BaseException) -> None:
        self.channel.fail(exc)


__all__ = ["CompletionChannel", "OutputCollector"]
