import pytest

from slogpp.level import NUM_LEVELS, Level, level_index, sub_level


@pytest.mark.parametrize(
    "level,n,expected",
    [
        (Level.ERROR, 2, Level.ERROR_2),
        (Level.TRACE, 1, Level.TRACE_1),
        (Level.WARN, 3, Level.WARN_3),
        (Level.INFO, 0, Level.INFO),
    ],
)
def test_sub_level(level, n, expected):
    assert sub_level(level, n) is expected


def test_sub_levels_lie_between_main_levels():
    for n in range(4):
        assert Level.WARN <= sub_level(Level.WARN, n) < Level.ERROR


@pytest.mark.parametrize("level", [Level.FATAL, Level.UNKNOWN, Level.TRACE_2])
def test_sub_level_rejects_non_subdividable(level):
    with pytest.raises(ValueError):
        sub_level(level, 1)


@pytest.mark.parametrize("n", [-1, 4])
def test_sub_level_rejects_out_of_range(n):
    with pytest.raises(ValueError):
        sub_level(Level.DEBUG, n)


def test_level_index_bounds():
    assert level_index(Level.UNKNOWN) == 0
    assert level_index(Level.TRACE) == 1
    assert level_index(Level.FATAL) == NUM_LEVELS - 1


def test_level_index_out_of_range_maps_to_unknown():
    assert level_index(NUM_LEVELS + 5) == 0
    assert level_index(-7) == 0


def test_every_level_has_distinct_index():
    indices = {level_index(level) for level in Level}
    assert len(indices) == len(Level) == NUM_LEVELS


def test_level_ordering():
    ordered = [Level.TRACE, Level.DEBUG, Level.INFO, Level.WARN, Level.ERROR, Level.FATAL]
    indices = [level_index(level) for level in ordered]
    assert indices == [1, 5, 9, 13, 17, 21]
    assert sorted(reversed(ordered)) == ordered