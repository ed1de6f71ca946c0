"""
Tests for composition of lenses and prisms.

Validates:
  - lens-only and mixed chains
  - short-circuiting get and no-op set on absence
  - copy-on-write minimality and structural sharing
  - associativity
  - construction-time errors for malformed chains
"""

import pytest

from optica import Capability, CompositionError, Just, Lens, Nothing, Prism, \
    at, compose, compose_lens, compose_prism, index, prop
from optica.compose import to_stage


class TestComposeLens:
    def test_composes_lenses(self):
        o = {"foo": {"bar": 1}}
        composed = compose_lens(prop("foo"), prop("bar"))
        assert isinstance(composed, Lens)
        assert composed(o) == 1
        assert composed.get(o) == 1
        assert composed.set(o, 10) == {"foo": {"bar": 10}}
        assert composed.setter(10)(o) == {"foo": {"bar": 10}}
        assert composed.update(o, lambda x: x - 1) == {"foo": {"bar": 0}}

    def test_five_stages(self):
        o = {"a": {"b": {"c": {"d": {"e": 1}}}}}
        composed = compose_lens(prop("a"), prop("b"), prop("c"), prop("d"),
                                prop("e"))
        assert composed.get(o) == 1
        assert composed.set(o, 2) == {"a": {"b": {"c": {"d": {"e": 2}}}}}

    def test_longer_than_five(self):
        depth = 12
        o: dict = {"leaf": 0}
        for _ in range(depth):
            o = {"n": o}
        composed = compose_lens(*([prop("n")] * depth), prop("leaf"))
        assert composed.get(o) == 0
        assert composed.update(o, lambda x: x + 1) == \
            compose_lens(*([prop("n")] * depth)).update(
                o, lambda inner: {"leaf": 1})

    def test_single_lens_is_returned(self):
        l = prop("foo")
        assert compose_lens(l) is l

    def test_empty_is_rejected(self):
        with pytest.raises(CompositionError):
            compose_lens()

    def test_prism_is_rejected(self):
        with pytest.raises(CompositionError, match="stage 1"):
            compose_lens(prop("xs"), index(0))

    def test_non_optic_is_rejected(self):
        with pytest.raises(CompositionError):
            compose_lens(prop("xs"), lambda x: x)


class TestComposePrism:
    def test_composes_lenses_and_prisms(self):
        x = {"prop": 1}
        outer = {"array": [x]}
        composed = compose_prism(prop("array"), index(0), prop("prop"))

        assert composed(outer) == Just(1)
        assert composed.get(outer) == Just(1)
        assert composed.set(outer, 10) == {"array": [{"prop": 10}]}
        assert outer == {"array": [{"prop": 1}]}

        empty: dict = {"array": []}
        assert composed(empty) == Nothing
        assert composed.get(empty) == Nothing
        assert composed.set(empty, 1) == {"array": []}
        assert composed.set(empty, 1) is empty

    def test_absence_in_the_middle_copies_nothing(self):
        o = {"left": {"m": {}}, "right": [1, 2]}
        composed = compose_prism(prop("left"), prop("m"), at("k"), prop("v"))
        assert composed.set(o, 3) is o
        assert composed.update(o, lambda v: v + 1) is o

    def test_absent_leaf_prism_copies_nothing(self):
        o = {"xs": [1]}
        composed = compose_prism(prop("xs"), index(4))
        assert composed.set(o, 0) is o

    def test_falsy_intermediates_are_present(self):
        composed = compose_prism(at("n"), Lens(get=lambda n: n,
                                              set=lambda _, v: v))
        assert composed.get({"n": 0}) == Just(0)
        assert composed.set({"n": 0}, 5) == {"n": 5}

    def test_single_stage(self):
        composed = compose_prism(prop("a"))
        assert isinstance(composed, Prism)
        assert composed.get({"a": 1}) == Just(1)

    def test_empty_is_rejected(self):
        with pytest.raises(CompositionError):
            compose_prism()


class TestCompose:
    def test_all_lenses_give_a_lens(self):
        assert isinstance(compose(prop("a"), prop("b")), Lens)

    def test_any_prism_gives_a_prism(self):
        assert isinstance(compose(prop("a"), at("b"), prop("c")), Prism)

    def test_stage_tags(self):
        assert to_stage(prop("a")).capability is Capability.LENS
        assert to_stage(at("a")).capability is Capability.PRISM
        with pytest.raises(CompositionError):
            to_stage("not an optic")


class TestCopyOnWrite:
    def test_one_copy_per_level_and_shared_siblings(self):
        sibling_a = {"untouched": [1, 2, 3]}
        sibling_b = {"also": "shared"}
        o = {"a": sibling_a,
             "path": {"b": sibling_b, "inner": {"leaf": 1, "peer": [0]}}}
        composed = compose_lens(prop("path"), prop("inner"), prop("leaf"))

        o2 = composed.set(o, 2)
        assert o2 is not o
        assert o2["path"] is not o["path"]
        assert o2["path"]["inner"] is not o["path"]["inner"]
        assert o2["a"] is sibling_a
        assert o2["path"]["b"] is sibling_b
        assert o2["path"]["inner"]["peer"] is o["path"]["inner"]["peer"]
        assert o["path"]["inner"]["leaf"] == 1

    def test_counts_copies(self):
        copies = []

        def counting(key):
            base = prop(key)

            def set_(s, v):
                copies.append(key)
                return base.set(s, v)
            return Lens(get=base.get, set=set_)

        o = {"a": {"b": {"c": {"d": 0}}}}
        composed = compose_lens(counting("a"), counting("b"), counting("c"),
                                counting("d"))
        composed.set(o, 1)
        assert copies == ["d", "c", "b", "a"]

    def test_prism_path_copies_per_level(self):
        o = {"array": [{"prop": 1}, {"prop": 2}]}
        composed = compose_prism(prop("array"), index(0), prop("prop"))
        o2 = composed.set(o, 10)
        assert o2["array"] is not o["array"]
        assert o2["array"][0] is not o["array"][0]
        assert o2["array"][1] is o["array"][1]


class TestAssociativity:
    def test_lens_grouping(self):
        a, b, c = prop("a"), prop("b"), prop("c")
        o = {"a": {"b": {"c": 1, "x": 2}}}
        flat = compose_lens(a, b, c)
        right = compose_lens(a, compose_lens(b, c))
        left = compose_lens(compose_lens(a, b), c)
        for l in (right, left):
            assert l.get(o) == flat.get(o)
            assert l.set(o, 7) == flat.set(o, 7)

    def test_mixed_grouping(self):
        a, b, c = prop("xs"), index(1), at("k")
        flat = compose_prism(a, b, c)
        right = a.comp(b.comp(c))
        left = a.comp(b).comp(c)
        samples = [
            {"xs": [{}, {"k": 1}]},
            {"xs": [{}, {}]},
            {"xs": [{}]},
        ]
        for o in samples:
            for p in (right, left):
                assert p.get(o) == flat.get(o)
                assert p.set(o, 9) == flat.set(o, 9)
