"""Tests for the randomization cache and the random render style."""

import random

from void_type.geometry import RenderStyle
from void_type.glyphs import ModuleType
from void_type.random_cache import PositionKey, RandomCache, RandomMode, RandomRanges
from void_type.render import AlternateChoices, RenderParams, build_scene
from void_type.render.scene import start_preview_pass


def _random_params(**kwargs):
    return RenderParams(module_size=10, render_style=RenderStyle.RANDOM, **kwargs)


def test_values_are_drawn_once_per_key():
    cache = RandomCache(random.Random(1))
    first = cache.values_for(ModuleType.ROUND, 10, RandomRanges())
    again = cache.values_for(ModuleType.ROUND, 10, RandomRanges())
    assert first is again
    assert len(cache) == 1
    assert ModuleType.ROUND in cache


def test_values_respect_ranges():
    cache = RandomCache(random.Random(7))
    ranges = RandomRanges()
    for i in range(50):
        values = cache.values_for(PositionKey(0, i, 0, 0), 10, ranges)
        assert 10 <= values.stem <= 20
        assert 1 <= values.stroke_count <= 8
        assert 0.5 <= values.stroke_gap_ratio <= 1.0
        assert not values.dashed


def test_reversed_ranges_are_reordered():
    cache = RandomCache(random.Random(3))
    ranges = RandomRanges(strokes_min=6, strokes_max=2, stem_min=1.0, stem_max=0.5)
    values = cache.values_for(ModuleType.BEND, 10, ranges)
    assert 2 <= values.stroke_count <= 6
    assert 10 <= values.stem <= 20


def test_random_dash_draws_dash_values():
    cache = RandomCache(random.Random(11))
    ranges = RandomRanges(strokes_min=2, strokes_max=4)
    draws = [cache.values_for(PositionKey(0, i, 0, 0), 10, ranges, True) for i in range(40)]
    dashed = [v for v in draws if v.dashed]
    assert dashed
    assert len(dashed) < len(draws)
    for values in dashed:
        assert 1.0 <= values.dash_length <= 1.5
        assert 1.0 <= values.gap_length <= 1.5


def test_single_stripe_is_never_dashed():
    cache = RandomCache(random.Random(5))
    ranges = RandomRanges(strokes_min=1, strokes_max=1)
    for i in range(20):
        assert not cache.values_for(PositionKey(0, i, 0, 0), 10, ranges, True).dashed


def test_clear_forgets_draws():
    cache = RandomCache(random.Random(1))
    cache.values_for(ModuleType.ROUND, 10, RandomRanges())
    cache.clear()
    assert len(cache) == 0
    assert cache.get(ModuleType.ROUND) is None


def test_by_type_shares_values_between_modules():
    cache = RandomCache(random.Random(2))
    build_scene("LL", _random_params(), 200, 100, cache=cache)
    # L uses Straight and Link modules only
    assert set(cache._values) == {ModuleType.STRAIGHT, ModuleType.LINK}


def test_full_mode_keys_every_position():
    cache = RandomCache(random.Random(2))
    scene = build_scene(
        "L", _random_params(random_mode=RandomMode.FULL), 100, 100, cache=cache
    )
    assert len(cache) == len(scene.modules) == 9
    assert PositionKey(0, 0, 4, 0) in cache


def test_repeated_pass_reuses_draws():
    cache = RandomCache(random.Random(4))
    params = _random_params(random_mode=RandomMode.FULL)
    first = build_scene("OK", params, 200, 100, cache=cache)
    second = build_scene("OK", params, 200, 100, cache=cache)
    assert first.modules == second.modules


def test_preview_pass_redraws():
    cache = RandomCache(random.Random(4))
    params = _random_params(random_mode=RandomMode.FULL)
    build_scene("OK", params, 200, 100, cache=cache)
    before = dict(cache._values)
    start_preview_pass(cache)
    assert len(cache) == 0
    build_scene("OK", params, 200, 100, cache=cache)
    assert dict(cache._values) != before


def test_random_alternates_are_stable_until_cleared():
    params = _random_params(use_alternates_in_random=True)
    choices = AlternateChoices(random.Random(9))
    cache = RandomCache(random.Random(9))
    picks = [
        build_scene("IIIIIIII", params, 500, 100, cache=cache, alternates=choices)
        for _ in range(2)
    ]
    first = [letter.alternate_index for letter in picks[0].letters]
    second = [letter.alternate_index for letter in picks[1].letters]
    assert first == second
    assert set(first) <= {None, 1}
