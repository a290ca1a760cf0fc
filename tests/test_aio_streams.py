"""Tests for asyncio-backed node streams."""

import asyncio

import pytest

from soupstream import InvalidArgumentError, StreamConfig, StreamStateError, is_tag
from soupstream.aio import (
    AsyncNodeStream,
    CollectErrorsPolicy,
    children,
    children_matching,
    descendants,
    descendants_by_attr_containing,
    descendants_by_tag,
)
from soupstream.testing import EndlessTree, wide_tree


CANONICAL = ["html", "head", "title", "T", "body", "p", "hi"]


@pytest.mark.asyncio
async def test_descendants_in_document_order(sample_doc):
    stream = descendants(sample_doc)
    assert isinstance(stream, AsyncNodeStream)
    assert [n.data for n in await stream.all()] == CANONICAL
    assert stream.drained
    assert stream.closed


@pytest.mark.asyncio
async def test_async_for(sample_doc):
    seen = []
    async for node in descendants(sample_doc):
        seen.append(node.data)
    assert seen == CANONICAL


@pytest.mark.asyncio
async def test_children_and_matching(sample_doc):
    html = sample_doc.first_child
    assert [n.data for n in await children(html).all()] == ["head", "body"]
    body = await children_matching(html, is_tag("body")).all()
    assert body == [html.last_child]


@pytest.mark.asyncio
async def test_first_closes_stream(sample_doc):
    stream = descendants_by_tag(sample_doc, "title")
    title = await stream.first()
    assert title.data == "title"
    assert stream.closed
    await stream.wait_closed()
    assert stream.tasks_done()


@pytest.mark.asyncio
async def test_first_on_empty_stream(sample_doc):
    assert await descendants_by_attr_containing(sample_doc, "href", "x").first() is None


@pytest.mark.asyncio
async def test_limit_on_endless_tree():
    tree = EndlessTree()
    limited = descendants(tree.document).limit(5)
    nodes = await limited.all()
    assert [n.attr("id") for n in nodes] == ["0", "1", "2", "3", "4"]
    await limited.wait_closed()
    assert limited.tasks_done()
    assert tree.created < 100


@pytest.mark.asyncio
async def test_limit_zero_and_negative():
    stream = descendants(wide_tree(10))
    assert await stream.limit(0).all() == []
    rejected = descendants(wide_tree(10))
    with pytest.raises(InvalidArgumentError):
        rejected.limit(-2)
    await rejected.aclose()
    await rejected.wait_closed()


@pytest.mark.asyncio
async def test_aclose_propagates_upstream():
    tree = EndlessTree()
    base = descendants(tree.document)
    filtered = base.filter(is_tag("item"))
    mapped = filtered.map(lambda n: n)
    await mapped.__anext__()
    await mapped.aclose()
    assert filtered.closed
    assert base.closed
    await mapped.wait_closed()
    assert mapped.tasks_done()


@pytest.mark.asyncio
async def test_aclose_stops_filter_that_rejects_everything():
    tree = EndlessTree()
    stream = descendants(tree.document).filter(lambda n: False)
    await asyncio.sleep(0.01)
    assert tree.created > 0
    await stream.aclose()
    await stream.wait_closed()
    assert stream.tasks_done()
    created = tree.created
    await asyncio.sleep(0.05)
    assert tree.created == created


@pytest.mark.asyncio
async def test_aclose_is_idempotent(sample_doc):
    stream = descendants(sample_doc)
    await stream.aclose()
    await stream.aclose()
    assert stream.closed
    assert not stream.drained
    assert await stream.all() == []


@pytest.mark.asyncio
async def test_async_with_closes_on_break():
    tree = EndlessTree()
    async with descendants(tree.document) as stream:
        async for node in stream:
            if node.attr("id") == "3":
                break
    assert stream.closed
    await stream.wait_closed()
    assert stream.tasks_done()


@pytest.mark.asyncio
async def test_fail_fast_error_reaches_consumer(sample_doc):
    def broken(node):
        raise ValueError("broken predicate")

    base = descendants(sample_doc)
    stream = base.filter(broken)
    with pytest.raises(ValueError, match="broken predicate"):
        await stream.all()
    assert stream.closed
    assert base.closed
    await stream.wait_closed()


@pytest.mark.asyncio
async def test_collect_policy_skips_nodes(sample_doc):
    policy = CollectErrorsPolicy()

    def only_elements(node):
        return node.is_tag(node.data) or 1 / 0

    stream = descendants(sample_doc, StreamConfig(error_policy=policy)).filter(only_elements)
    assert [n.data for n in await stream.all()] == ["html", "head", "title", "body", "p"]
    assert [e['error_type'] for e in policy.errors] == ["ZeroDivisionError"] * 2


@pytest.mark.asyncio
async def test_apply_awaits_coroutines(sample_doc):
    seen = []

    async def record(node):
        await asyncio.sleep(0)
        seen.append(node.data)

    count = await descendants(sample_doc).apply(record)
    assert count == 7
    assert seen == CANONICAL


@pytest.mark.asyncio
async def test_apply_closes_on_error():
    tree = EndlessTree()
    stream = descendants(tree.document)

    def stop_at_two(node):
        if node.attr("id") == "2":
            raise KeyError("stop")

    with pytest.raises(KeyError):
        await stream.apply(stop_at_two)
    assert stream.closed
    await stream.wait_closed()


@pytest.mark.asyncio
async def test_single_reader():
    base = descendants(wide_tree(10))
    derived = base.filter(is_tag("p"))
    with pytest.raises(StreamStateError):
        base.limit(1)
    await derived.aclose()


@pytest.mark.asyncio
async def test_invalid_arguments():
    with pytest.raises(InvalidArgumentError):
        descendants(None)
    with pytest.raises(InvalidArgumentError):
        children(wide_tree(1), StreamConfig(buffer_size=0))
