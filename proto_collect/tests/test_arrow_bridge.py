import unittest

try:
    import pyarrow as pa  # type: ignore
    have_arrow = True
except Exception:  # pragma: no cover
    have_arrow = False

try:
    import numpy as np  # type: ignore
    have_numpy = True
except Exception:  # pragma: no cover
    have_numpy = False

from ..arrow_bridge import ArrowNotAvailable, from_arrow, to_arrow
from ..collection import Collection
from ..exceptions import ProtoNotSupportedException


class TestArrowBridge(unittest.TestCase):
    def test_to_arrow_no_dep(self):
        if not have_arrow:
            with self.assertRaises(ArrowNotAvailable):
                _ = to_arrow([{'a': 1}], columns=['a'])
        else:
            tbl = to_arrow([{'a': 1}, {'a': 2}], columns=['a'])
            self.assertEqual(tbl.num_rows, 2)
            self.assertIn('a', tbl.column_names)


@unittest.skipUnless(have_arrow, 'pyarrow not installed')
class TestCollectionArrow(unittest.TestCase):
    def test_round_trip(self):
        users = Collection([{'name': 'taylor', 'age': 30}, {'name': 'abigail', 'age': 25}])
        table = users.to_arrow()
        self.assertEqual(table.column_names, ['name', 'age'])
        self.assertEqual(Collection.from_arrow(table).all(), users.all())

    def test_missing_columns_become_nulls(self):
        table = to_arrow([{'a': 1}, {'b': 2}])
        self.assertEqual(from_arrow(table), [{'a': 1, 'b': None}, {'a': None, 'b': 2}])

    def test_selected_columns(self):
        table = Collection([{'a': 1, 'b': 2}]).to_arrow(columns=['b'])
        self.assertEqual(table.column_names, ['b'])

    def test_scalars_are_refused(self):
        with self.assertRaises(ProtoNotSupportedException):
            Collection([1, 2]).to_arrow()

    @unittest.skipUnless(have_numpy, 'numpy not installed')
    def test_numpy_values(self):
        table = to_arrow([{'v': np.array([1.0, 2.0])}])
        self.assertEqual(from_arrow(table), [{'v': [1.0, 2.0]}])


if __name__ == '__main__':
    unittest.main()
