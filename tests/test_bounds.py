import pytest

from spanmap.bounds import UNBOUNDED, Bound, EndBound, StartBound, encloses, meets


def start(kind: str, value=None) -> StartBound:
    return StartBound(Bound(kind, value))


def end(kind: str, value=None) -> EndBound:
    return EndBound(Bound(kind, value))


class TestBound:
    def test_constructors(self):
        assert Bound.included(3) == Bound("included", 3)
        assert Bound.excluded(3) == Bound("excluded", 3)
        assert Bound.unbounded() is UNBOUNDED
        assert UNBOUNDED.value is None

    def test_rejects_unknown_kind(self):
        with pytest.raises(ValueError, match="Bound kind"):
            Bound("sideways", 1)

    def test_unbounded_has_no_value(self):
        with pytest.raises(ValueError, match="carries no value"):
            Bound("unbounded", 1)

    def test_bounded_kinds_need_a_value(self):
        with pytest.raises(ValueError, match="needs a value"):
            Bound.included(None)
        with pytest.raises(ValueError, match="needs a value"):
            Bound("excluded")

    def test_flipped(self):
        assert Bound.included(1).flipped() == Bound.excluded(1)
        assert Bound.excluded(1).flipped() == Bound.included(1)
        assert UNBOUNDED.flipped() is UNBOUNDED


class TestStartBoundOrder:
    def test_unbounded_sorts_first(self):
        assert start("unbounded") < start("included", -1000)
        assert start("unbounded") < start("excluded", -1000)
        assert not start("unbounded") < start("unbounded")

    def test_included_before_excluded_at_equal_value(self):
        """[x begins earlier than (x."""
        assert start("included", 5) < start("excluded", 5)
        assert start("excluded", 5) > start("included", 5)

    def test_value_dominates_kind(self):
        assert start("excluded", 4) < start("included", 5)

    def test_sorting(self):
        bounds = [
            start("excluded", 2),
            start("included", 2),
            start("unbounded"),
            start("included", 1),
        ]
        assert sorted(bounds) == [
            start("unbounded"),
            start("included", 1),
            start("included", 2),
            start("excluded", 2),
        ]

    def test_does_not_compare_with_end_bounds(self):
        with pytest.raises(TypeError):
            _ = start("included", 1) < end("included", 2)


class TestEndBoundOrder:
    def test_unbounded_sorts_last(self):
        assert end("included", 1000) < end("unbounded")
        assert end("excluded", 1000) < end("unbounded")

    def test_excluded_before_included_at_equal_value(self):
        """x) finishes earlier than x]."""
        assert end("excluded", 5) < end("included", 5)

    def test_max_and_min(self):
        assert max(end("excluded", 5), end("included", 5)) == end("included", 5)
        assert min(end("unbounded"), end("excluded", 9)) == end("excluded", 9)


class TestAdjacency:
    def test_before_start(self):
        assert start("included", 3).before() == end("excluded", 3)
        assert start("excluded", 3).before() == end("included", 3)
        assert start("unbounded").before() is None

    def test_after_end(self):
        assert end("excluded", 3).after() == start("included", 3)
        assert end("included", 3).after() == start("excluded", 3)
        assert end("unbounded").after() is None

    def test_before_and_after_are_inverse(self):
        for bound in (start("included", 7), start("excluded", 7)):
            assert bound.before().after() == bound


class TestAdmits:
    def test_start(self):
        assert start("included", 3).admits(3)
        assert not start("excluded", 3).admits(3)
        assert start("excluded", 3).admits(3.5)
        assert start("unbounded").admits(-(10**9))

    def test_end(self):
        assert end("included", 3).admits(3)
        assert not end("excluded", 3).admits(3)
        assert end("excluded", 3).admits(2.5)
        assert end("unbounded").admits(10**9)


class TestRegionPredicates:
    @pytest.mark.parametrize(
        ("s", "e", "expected"),
        [
            (start("included", 3), end("included", 3), True),
            (start("included", 3), end("excluded", 3), False),
            (start("excluded", 3), end("included", 3), False),
            (start("excluded", 3), end("excluded", 3), False),
            (start("excluded", 3), end("excluded", 4), True),
            (start("included", 4), end("included", 3), False),
            (start("unbounded"), end("excluded", -5), True),
            (start("included", 5), end("unbounded"), True),
        ],
    )
    def test_encloses(self, s, e, expected):
        assert encloses(s, e) is expected

    @pytest.mark.parametrize(
        ("s", "e", "expected"),
        [
            (start("included", 3), end("included", 3), True),
            (start("included", 3), end("excluded", 3), True),
            (start("excluded", 3), end("included", 3), True),
            (start("excluded", 3), end("excluded", 3), False),
            (start("included", 4), end("included", 3), False),
            (start("unbounded"), end("unbounded"), True),
        ],
    )
    def test_meets(self, s, e, expected):
        assert meets(s, e) is expected


def test_rendering():
    assert str(start("included", 2)) == "[2"
    assert str(start("excluded", 2)) == "(2"
    assert str(start("unbounded")) == "(-∞"
    assert str(end("included", 5)) == "5]"
    assert str(end("excluded", 5)) == "5)"
    assert str(end("unbounded")) == "∞)"
    assert str(start("included", "a")) == "['a'"
