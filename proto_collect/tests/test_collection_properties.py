import unittest

from hypothesis import given, settings, strategies as st

from ..collection import Collection
from ..normalize import objectable_items

_scalars = st.one_of(st.none(), st.booleans(), st.integers(), st.text(max_size=5))
_names = st.text(alphabet='abcdefghij_', min_size=1, max_size=6)
_inputs = st.one_of(
    _scalars,
    st.lists(_scalars, max_size=10),
    st.dictionaries(_names, _scalars, max_size=10),
    st.lists(st.tuples(_names, _scalars), max_size=10),
)


class TestCollectionProperties(unittest.TestCase):
    @given(_inputs)
    @settings(deadline=None)
    def test_normalization_is_idempotent(self, items):
        once = objectable_items(items)
        self.assertEqual(objectable_items(once), once)
        self.assertEqual(list(objectable_items(once)), list(once))

    @given(st.lists(st.integers(), max_size=20))
    @settings(deadline=None)
    def test_transformations_leave_source_untouched(self, items):
        c = Collection(items)
        before_all, before_object = c.all(), c.to_object()
        c.map(lambda item: item * 2)
        c.filter(lambda item: item % 2)
        c.sort()
        c.values()
        c.reverse()
        self.assertEqual(c.all(), before_all)
        self.assertEqual(c.to_object(), before_object)

    @given(st.dictionaries(_names, _scalars, min_size=1, max_size=10))
    @settings(deadline=None)
    def test_keyed_round_trip(self, items):
        c = Collection(items)
        self.assertFalse(c.is_list())
        self.assertEqual(Collection(c.to_object()).to_object(), c.to_object())

    @given(st.lists(_scalars, max_size=20))
    @settings(deadline=None)
    def test_plain_lists_stay_lists(self, items):
        c = Collection(items)
        self.assertTrue(c.is_list())
        self.assertEqual(c.all(), items)

    @given(st.lists(st.integers(min_value=-1000, max_value=1000), max_size=20))
    @settings(deadline=None)
    def test_sort_orders_values(self, items):
        self.assertEqual(Collection(items).sort().values().all(), sorted(items))

    @given(st.integers(-50, 50), st.integers(-50, 50), st.integers(1, 7))
    @settings(deadline=None)
    def test_range_bounds(self, start, stop, step):
        values = Collection.range(start, stop, step).all()
        self.assertEqual(values[0], start)
        self.assertTrue(all(min(start, stop) <= v <= max(start, stop) for v in values))
        self.assertEqual(len(values), abs(stop - start) // step + 1)


if __name__ == '__main__':
    unittest.main()
