# tests/property_based/test_wrapper_properties.py
"""Property-based tests for wrapper transparency and handler effects."""

import hypothesis.strategies as st
from hypothesis import given, settings

from object_proxy import wrap, wrap_catch, wrap_fake, wrap_proxy, wrap_track

values = st.one_of(st.integers(), st.text(max_size=20), st.booleans(), st.none())
argument_lists = st.lists(values, max_size=5)
keyword_maps = st.dictionaries(
    st.text(alphabet="abcdefgh", min_size=1, max_size=5), values, max_size=4
)


class Echo:
    """Target returning its arguments unchanged."""

    def __init__(self):
        self.seen = []

    def call(self, *args, **kwargs):
        self.seen.append((args, kwargs))
        return args, kwargs

    def first(self, *args, **kwargs):
        return args[0] if args else None


class TestTransparency:
    @given(args=argument_lists, kwargs=keyword_maps)
    @settings(max_examples=50, deadline=None)
    def test_no_handlers_behaves_like_target(self, args, kwargs):
        """Property: proxy, track and catch without handlers forward unchanged."""
        for mode in ("proxy", "track", "catch"):
            target = Echo()
            wrapper = wrap(target, mode)
            assert wrapper.call(*args, **kwargs) == (tuple(args), kwargs)
            assert target.seen == [(tuple(args), kwargs)]

    @given(args=argument_lists, kwargs=keyword_maps)
    @settings(max_examples=50, deadline=None)
    def test_track_observers_never_change_the_call(self, args, kwargs):
        """Property: track observers cannot alter arguments or results."""
        target = Echo()
        tracker = wrap_track(target)
        tracker.before_call(lambda name, a, kw: kw.clear())
        tracker.after_call(lambda name, result: None)
        assert tracker.call(*args, **kwargs) == (tuple(args), kwargs)


class TestProxyRewrites:
    @given(args=argument_lists, replacement=argument_lists)
    @settings(max_examples=50, deadline=None)
    def test_before_replaces_arguments(self, args, replacement):
        """Property: the target sees exactly what the before-handler returns."""
        target = Echo()
        proxy = wrap_proxy(target)
        proxy.on_before("call", lambda a, kw: (replacement, {}))
        proxy.call(*args)
        assert target.seen == [(tuple(replacement), {})]

    @given(args=argument_lists, result=values)
    @settings(max_examples=50, deadline=None)
    def test_after_replaces_result(self, args, result):
        """Property: the caller sees exactly what the after-handler returns."""
        proxy = wrap_proxy(Echo())
        proxy.on_after("first", lambda r: result)
        assert proxy.first(*args) == result


class TestCatchAndFake:
    @given(args=argument_lists, kwargs=keyword_maps)
    @settings(max_examples=50, deadline=None)
    def test_catch_sees_every_call(self, args, kwargs):
        """Property: the dispatch function receives the exact call and the target none."""
        target = Echo()
        calls = []
        wrapper = wrap_catch(target, lambda name, a, kw: calls.append((name, a, kw)))
        assert wrapper.call(*args, **kwargs) is None
        assert calls == [("call", tuple(args), kwargs)]
        assert target.seen == []

    @given(count=st.integers(min_value=0, max_value=10))
    @settings(max_examples=20, deadline=None)
    def test_instance_created_runs_once_per_wrapper(self, count):
        """Property: N constructions trigger the hook exactly N times."""
        factory = wrap_catch(Echo)
        created = []
        factory.instance_created(created.append)
        wrappers = [factory() for _ in range(count)]
        assert created == wrappers

    @given(args=argument_lists)
    @settings(max_examples=50, deadline=None)
    def test_fake_does_nothing_and_native_calls_through(self, args):
        """Property: faked operations return None and leave state alone."""
        fake = wrap_fake(Echo)()
        assert fake.call(*args) is None
        assert fake.seen == []
        assert fake.native_call(*args) == (tuple(args), {})
        assert fake.seen == [(tuple(args), {})]
