from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from pdfsmith.adapters.trace_session import TraceSession
from pdfsmith.core.config import RenderConfig
from pdfsmith.core.exceptions import FontNotFoundError, InvalidAttributeError, SessionStateError
from pdfsmith.core.session import DocumentOptions, DocumentSession, EventedSession, RenderState


class StaticSession(EventedSession):
    def __init__(self, payload: bytes, *, chunk_size: int = 4) -> None:
        super().__init__(chunk_size=chunk_size)
        self.payload = payload

    def _encode(self) -> bytes:
        return self.payload


def test_document_options_use_config_defaults() -> None:
    config = RenderConfig(page_size="A4", margin=36, font="Courier", font_size=10, chunk_size=512)

    options = DocumentOptions.from_attributes({}, config)

    assert options.size == "A4"
    assert options.layout == "portrait"
    assert options.margin == 36
    assert options.font == "Courier"
    assert options.font_size == 10
    assert options.chunk_size == 512


def test_document_options_read_root_attributes() -> None:
    options = DocumentOptions.from_attributes(
        {
            "size": "595x842",
            "layout": "Landscape",
            "margin": "18",
            "title": "Report",
            "author": " Ada ",
            "keywords": "",
            "unknown": "ignored",
        }
    )

    assert options.size == (595.0, 842.0)
    assert options.layout == "landscape"
    assert options.margin == 18.0
    assert options.title == "Report"
    assert options.author == "Ada"
    assert options.keywords is None


@pytest.mark.parametrize(
    ("attribute", "value"),
    [("layout", "sideways"), ("margin", "-1"), ("margin", "wide"), ("size", "0x100"), ("size", "")],
)
def test_document_options_reject_invalid_attributes(attribute: str, value: str) -> None:
    with pytest.raises(InvalidAttributeError) as excinfo:
        DocumentOptions.from_attributes({attribute: value})

    assert excinfo.value.tag == "document"
    assert excinfo.value.attribute == attribute


def test_trace_session_satisfies_protocol() -> None:
    assert isinstance(TraceSession(), DocumentSession)


def test_trace_session_requires_registered_font_files(tmp_path: Path) -> None:
    present = tmp_path / "brand.ttf"
    present.write_bytes(b"")
    session = TraceSession(fonts={"Brand": present, "Gone": tmp_path / "gone.ttf"})

    session.set_font("Brand")
    session.set_font("times-bold")
    with pytest.raises(FontNotFoundError, match="Gone"):
        session.set_font("Gone")
    assert session.font == "times-bold"


def test_finalize_requires_running_loop() -> None:
    session = StaticSession(b"payload")

    with pytest.raises(SessionStateError, match="running event loop"):
        session.finalize()
    assert session.state is RenderState.BUILDING


def test_mutations_are_rejected_after_finalize() -> None:
    async def scenario() -> TraceSession:
        session = TraceSession()
        session.add_page()
        session.finalize()
        assert session.state is RenderState.FINALIZING
        with pytest.raises(SessionStateError, match="finalizing"):
            session.add_page()
        with pytest.raises(SessionStateError):
            session.finalize()
        return session

    session = asyncio.run(scenario())
    assert session.page_count == 1


def test_finalize_delivers_chunks_then_end() -> None:
    events: list[object] = []

    async def scenario() -> StaticSession:
        session = StaticSession(b"abcdefghij", chunk_size=4)
        session.on("data", events.append).on("end", lambda: events.append("end"))
        session.finalize()
        assert events == []
        for _ in range(10):
            await asyncio.sleep(0)
        return session

    session = asyncio.run(scenario())

    assert events == [b"abcd", b"efgh", b"ij", "end"]
    assert session.state is RenderState.COMPLETE


def test_encode_failure_emits_error() -> None:
    errors: list[BaseException] = []

    class BrokenSession(StaticSession):
        def _encode(self) -> bytes:
            raise ValueError("cannot encode")

    async def scenario() -> BrokenSession:
        session = BrokenSession(b"")
        session.on("error", errors.append).on("end", lambda: errors.append(AssertionError("end")))
        session.finalize()
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        return session

    session = asyncio.run(scenario())

    assert len(errors) == 1
    assert isinstance(errors[0], ValueError)
    assert session.state is RenderState.FINALIZING


def test_abandon_silences_pending_output() -> None:
    events: list[object] = []

    async def scenario() -> StaticSession:
        session = StaticSession(b"abcdefgh", chunk_size=2)
        session.on("data", events.append).on("end", lambda: events.append("end"))
        session.finalize()
        await asyncio.sleep(0)
        session.abandon()
        for _ in range(5):
            await asyncio.sleep(0)
        return session

    session = asyncio.run(scenario())

    assert events == [b"ab"]
    assert session.abandoned
    with pytest.raises(SessionStateError, match="abandoned"):
        session.finalize()


def test_unknown_event_name_is_rejected() -> None:
    with pytest.raises(ValueError, match="Unknown session event"):
        StaticSession(b"").on("finish", lambda: None)


def test_chunk_size_must_be_positive() -> None:
    with pytest.raises(ValueError):
        StaticSession(b"", chunk_size=0)
