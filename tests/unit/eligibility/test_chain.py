import itertools

import pytest

from prhook.eligibility.base import EligibilityFilter
from prhook.eligibility.chain import EligibilityFilterChain
from prhook.eligibility.context import build_event_context
from tests.helpers import make_event


class StaticFilter(EligibilityFilter):
    def __init__(self, allow: bool, name: str = "static"):
        self.allow = allow
        self.name = name
        self.calls = 0

    async def evaluate(self, context) -> bool:
        self.calls += 1
        return self.allow


@pytest.fixture
def context():
    return build_event_context(make_event())


@pytest.mark.asyncio
async def test_empty_chain_allows(context):
    assert await EligibilityFilterChain().evaluate(context) is True


@pytest.mark.asyncio
async def test_all_allow(context):
    chain = EligibilityFilterChain([StaticFilter(True), StaticFilter(True)])
    assert await chain.evaluate(context) is True


@pytest.mark.asyncio
@pytest.mark.parametrize("order", list(itertools.permutations([True, True, False])))
async def test_any_deny_denies_in_every_order(context, order):
    chain = EligibilityFilterChain([StaticFilter(allow) for allow in order])
    assert await chain.evaluate(context) is False


@pytest.mark.asyncio
async def test_stops_at_first_deny(context):
    first, second, third = StaticFilter(True), StaticFilter(False), StaticFilter(True)
    chain = EligibilityFilterChain([first, second, third])

    await chain.evaluate(context)

    assert (first.calls, second.calls, third.calls) == (1, 1, 0)


@pytest.mark.asyncio
async def test_chains_nest(context):
    inner = EligibilityFilterChain([StaticFilter(True), StaticFilter(False)])
    outer = EligibilityFilterChain([StaticFilter(True), inner])

    assert await outer.evaluate(context) is False
    assert len(outer) == 2


def test_filters_are_held_in_order():
    filters = [StaticFilter(True, name="a"), StaticFilter(True, name="b")]
    chain = EligibilityFilterChain(iter(filters))

    assert [f.name for f in chain.filters] == ["a", "b"]


def test_build_event_context():
    event = make_event(username="carol")

    context = build_event_context(event)

    assert context.event is event
    assert context.repository == event.pull_request.to_ref.repository
    assert context.username == "carol"
