"""Tests for the cached publication of json-home documents."""

from __future__ import annotations

import threading

from models.declaration import ResourceCatalog, ResourceDeclaration
from services.generator import JsonHomeGenerator
from services.source import JsonHomeSource


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class CountingScanner:
    """Adds one resource per scan, so that every generation differs."""

    def __init__(self) -> None:
        self.scans = 0

    def scan(self) -> ResourceCatalog:
        self.scans += 1
        return ResourceCatalog(resources=[
            ResourceDeclaration(rel=f"/rel/r{i}", href=f"/r{i}")
            for i in range(self.scans)
        ])


def make_source(generator: JsonHomeGenerator, max_age=60):
    clock = FakeClock()
    scanner = CountingScanner()
    return JsonHomeSource(generator, scanner, max_age=max_age, clock=clock), scanner, clock


def test_document_is_cached(generator: JsonHomeGenerator) -> None:
    source, scanner, clock = make_source(generator)
    first = source.get_json_home()
    clock.now = 59
    assert source.get_json_home() is first
    assert scanner.scans == 1


def test_document_is_regenerated_after_max_age(generator: JsonHomeGenerator) -> None:
    source, scanner, clock = make_source(generator)
    first = source.get_json_home()
    clock.now = 60
    second = source.get_json_home()
    assert scanner.scans == 2
    assert second is not first
    assert len(first) == 1
    assert len(second) == 2


def test_invalidate(generator: JsonHomeGenerator) -> None:
    source, scanner, _ = make_source(generator)
    first = source.get_json_home()
    source.invalidate()
    second = source.get_json_home()
    assert scanner.scans == 2
    assert first.relation_types == ("http://example.org/rel/r0",)
    assert len(second) == 2


def test_without_max_age_document_never_expires(generator: JsonHomeGenerator) -> None:
    source, scanner, clock = make_source(generator, max_age=None)
    first = source.get_json_home()
    clock.now = 10 ** 9
    assert source.get_json_home() is first
    assert scanner.scans == 1


def test_zero_max_age_regenerates_on_every_read(generator: JsonHomeGenerator) -> None:
    source, scanner, _ = make_source(generator, max_age=0)
    source.get_json_home()
    source.get_json_home()
    assert scanner.scans == 2


def test_concurrent_readers_share_one_generation(generator: JsonHomeGenerator) -> None:
    source, scanner, _ = make_source(generator)
    results = []

    def read() -> None:
        results.append(source.get_json_home())

    threads = [threading.Thread(target=read) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert scanner.scans == 1
    assert all(result is results[0] for result in results)
