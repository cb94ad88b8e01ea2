from __future__ import annotations

import asyncio

import pytest

from conceptsync.domain.errors import ConceptFetchError
from conceptsync.domain.traversal import ConceptGraphTraversal, traverse
from tests.support.concepts import (
    OTHER_SOURCE_URL,
    SOURCE_URL,
    FakeConceptFetcher,
    make_concept,
    make_mapping,
)


def _run(seeds: list[str], fetcher: FakeConceptFetcher, *, concurrency: int = 15):
    return asyncio.run(traverse(seeds, fetcher, source_url=SOURCE_URL, concurrency=concurrency))


def test_single_seed_without_mappings() -> None:
    fetcher = FakeConceptFetcher({"100": make_concept("100")})

    cache = _run(["100"], fetcher)

    assert list(cache) == ["100"]
    assert fetcher.calls == ["100"]


def test_follows_same_source_mapping() -> None:
    fetcher = FakeConceptFetcher(
        {"100": make_concept("100", "200"), "200": make_concept("200")}
    )

    cache = _run(["100"], fetcher)

    assert set(cache) == {"100", "200"}
    assert fetcher.calls == ["100", "200"]


def test_ignores_mappings_to_other_sources() -> None:
    foreign = make_mapping("100", "999", to_source_url=OTHER_SOURCE_URL)
    fetcher = FakeConceptFetcher({"100": make_concept("100", mappings=[foreign])})

    cache = _run(["100"], fetcher)

    assert set(cache) == {"100"}
    assert "999" not in fetcher.calls


def test_resolves_transitive_closure_with_cycles() -> None:
    concepts = {
        "1": make_concept("1", "2", "3"),
        "2": make_concept("2", "1", "4"),
        "3": make_concept("3", "4"),
        "4": make_concept("4", "1", "5"),
        "5": make_concept("5"),
        "6": make_concept("6"),
    }
    fetcher = FakeConceptFetcher(concepts)

    cache = _run(["1"], fetcher, concurrency=2)

    assert set(cache) == {"1", "2", "3", "4", "5"}
    assert sorted(fetcher.calls) == ["1", "2", "3", "4", "5"]


def test_fetches_each_identifier_once_when_enqueued_repeatedly() -> None:
    concepts = {
        "1": make_concept("1", "9"),
        "2": make_concept("2", "9"),
        "3": make_concept("3", "9"),
        "9": make_concept("9"),
    }
    fetcher = FakeConceptFetcher(concepts)

    cache = _run(["1", "2", "3", "1", "9"], fetcher, concurrency=2)

    assert fetcher.calls.count("9") == 1
    assert fetcher.calls.count("1") == 1
    assert cache["9"] is concepts["9"]


def test_never_exceeds_concurrency_cap() -> None:
    concepts = {"0": make_concept("0", *[str(i) for i in range(1, 40)])}
    concepts.update({str(i): make_concept(str(i)) for i in range(1, 40)})
    fetcher = FakeConceptFetcher(concepts)

    cache = _run(["0"], fetcher, concurrency=4)

    assert len(cache) == 40
    assert fetcher.max_in_flight == 4


def test_fetch_failure_aborts_traversal() -> None:
    fetcher = FakeConceptFetcher(
        {"100": make_concept("100", "200", "300"), "300": make_concept("300")},
        failing={"200"},
    )

    with pytest.raises(ConceptFetchError) as excinfo:
        _run(["100"], fetcher)

    assert excinfo.value.concept_id == "200"
    assert isinstance(excinfo.value.__cause__, RuntimeError)


def test_failure_surfaces_after_batch_settles() -> None:
    fetcher = FakeConceptFetcher(
        {"1": make_concept("1"), "3": make_concept("3")},
        failing={"2"},
    )

    with pytest.raises(ConceptFetchError):
        _run(["1", "2", "3"], fetcher, concurrency=3)

    assert fetcher.calls == ["1", "2", "3"]


def test_resolve_returns_cached_concept_without_io() -> None:
    concept = make_concept("100")
    fetcher = FakeConceptFetcher({"100": concept})
    traversal = ConceptGraphTraversal(fetch=fetcher, source_url=SOURCE_URL)

    async def scenario() -> None:
        first = await traversal.resolve("100")
        second = await traversal.resolve("100")
        assert first is second is concept

    asyncio.run(scenario())

    assert fetcher.calls == ["100"]


def test_resolve_after_failed_fetch_retries() -> None:
    concept = make_concept("100")
    fetcher = FakeConceptFetcher({"100": concept}, failing={"100"})
    traversal = ConceptGraphTraversal(fetch=fetcher, source_url=SOURCE_URL)

    async def scenario() -> None:
        for _ in range(2):
            with pytest.raises(ConceptFetchError, match="100"):
                await traversal.resolve("100")
        fetcher.failing.clear()
        assert await traversal.resolve("100") is concept

    asyncio.run(scenario())

    assert fetcher.calls == ["100", "100", "100"]


def test_mismatched_identifier_is_not_refetched() -> None:
    # "7" answers with concept "8", which maps back to "7"
    concepts = {"7": make_concept("8", "7")}
    fetcher = FakeConceptFetcher(concepts)

    cache = _run(["7"], fetcher)

    assert set(cache) == {"8"}
    assert fetcher.calls == ["7"]


def test_rejects_non_positive_concurrency() -> None:
    with pytest.raises(ValueError, match="Concurrency"):
        ConceptGraphTraversal(fetch=FakeConceptFetcher({}), source_url=SOURCE_URL, concurrency=0)


def test_empty_seed_list_resolves_nothing() -> None:
    fetcher = FakeConceptFetcher({})

    assert _run([], fetcher) == {}
    assert fetcher.calls == []
