"""Tests for the public entry points: dump(), dumps(), @dumped."""

from __future__ import annotations

import asyncio
import inspect
from dataclasses import dataclass

import pytest

import dumpjson
from dumpjson import (
    DumpSettings,
    FixedProbe,
    SerializationError,
    SerializerOptions,
    Writer,
    dump,
    dumped,
    dumps,
    get_settings,
    reset_settings,
)
from dumpjson.output import reset_default_writer
from dumpjson.probes import reset_default_probe


@dataclass
class Person:
    Name: str
    Age: int


class RecordingSink:
    def __init__(self) -> None:
        self.lines: list[str] = []

    def write_line(self, text: str) -> None:
        self.lines.append(text)


@pytest.fixture(autouse=True)
def _reset(monkeypatch, tmp_path):
    for key in ("DUMPJSON_CONSOLE", "DUMPJSON_DEBUG", "DUMPJSON_INDENT", "DUMPJSON_NAMING_POLICY"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr("dumpjson.settings._DEFAULT_PATH", tmp_path / "absent.yaml")
    reset_settings()
    reset_default_writer()
    reset_default_probe()
    yield
    reset_settings()
    reset_default_writer()
    reset_default_probe()


@pytest.fixture()
def recording_writer():
    console = RecordingSink()
    writer = Writer(
        settings=DumpSettings(console_override="on", debug_override="off"),
        probe=FixedProbe(),
        console=console,
    )
    return writer, console


class TestDump:
    def test_chains_inline(self, recording_writer):
        writer, console = recording_writer
        age = dump(Person("John Doe", 30), "Person response", writer=writer).Age
        assert age == 30
        assert console.lines[0] == "Person response"

    def test_default_writer_prints_to_stdout(self, capsys):
        settings = get_settings()
        settings.console_override = "on"
        settings.debug_override = "off"

        person = Person("John Doe", 30)
        assert dump(person, "Person response") is person

        out = capsys.readouterr().out
        assert out == 'Person response\n{\n  "Name": "John Doe",\n  "Age": 30\n}\n'

    def test_default_writer_silent_when_forced_off(self, capsys):
        settings = get_settings()
        settings.console_override = "off"
        settings.debug_override = "off"
        assert dump({"a": 1}) == {"a": 1}
        assert capsys.readouterr().out == ""

    def test_default_writer_follows_options_change(self, capsys):
        settings = get_settings()
        settings.console_override = "on"
        settings.debug_override = "off"
        settings.serializer_options = SerializerOptions(indent=None)
        dump({"a": 1})
        assert capsys.readouterr().out == '{"a": 1}\n'


class TestDumps:
    def test_uses_process_options(self):
        get_settings().serializer_options = SerializerOptions(indent=None)
        assert dumps(Person("A", 1)) == '{"Name": "A", "Age": 1}'

    def test_explicit_options(self):
        text = dumps(Person("A", 1), SerializerOptions(indent=None, naming_policy="snake"))
        assert text == '{"name": "A", "age": 1}'

    def test_failure(self):
        with pytest.raises(SerializationError):
            dumps(object())


class TestDumpedDecorator:
    def test_sync_function(self, recording_writer):
        writer, console = recording_writer

        @dumped(writer=writer)
        def make_person(name: str) -> Person:
            return Person(name, 1)

        person = make_person("Ann")
        assert person == Person("Ann", 1)
        assert console.lines[0].endswith("make_person")
        assert '"Name": "Ann"' in console.lines[1]

    def test_explicit_label(self, recording_writer):
        writer, console = recording_writer

        @dumped("totals", writer=writer)
        def totals() -> list[int]:
            return [1, 2]

        result = totals()
        assert result == [1, 2]
        assert console.lines == ["totals", "[\n  1,\n  2\n]"]

    def test_returns_same_object(self, recording_writer):
        writer, _ = recording_writer
        payload = {"k": "v"}

        @dumped(writer=writer)
        def passthrough():
            return payload

        assert passthrough() is payload

    def test_preserves_metadata(self):
        @dumped("x")
        def documented():
            """Docstring."""

        assert documented.__name__ == "documented"
        assert documented.__doc__ == "Docstring."

    def test_async_function(self, recording_writer):
        writer, console = recording_writer

        @dumped("fetched", writer=writer)
        async def fetch() -> dict:
            await asyncio.sleep(0)
            return {"ok": True}

        assert inspect.iscoroutinefunction(fetch)
        assert asyncio.run(fetch()) == {"ok": True}
        assert console.lines == ["fetched", '{\n  "ok": true\n}']

    def test_exception_not_dumped(self, recording_writer):
        writer, console = recording_writer

        @dumped(writer=writer)
        def boom():
            raise KeyError("missing")

        with pytest.raises(KeyError):
            boom()
        assert console.lines == []


class TestPublicSurface:
    def test_all_exports_resolve(self):
        for name in dumpjson.__all__:
            assert hasattr(dumpjson, name), name
