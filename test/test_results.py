#
# Copyright (c) 2009, 2025 mklivestatus contributors. All rights reserved.
#
# Licensed under the Universal Permissive License v 1.0 as shown at
#  https://oss.oracle.com/licenses/upl/
#

import unittest

from mklivestatus import IllegalArgumentException, KeyFieldNotFoundException
from mklivestatus import results


class TestResults(unittest.TestCase):

    def setUp(self):
        self.rows = [['a', '1'], ['b', '2'], ['c', '3']]

    def testLimitRows(self):
        self.assertEqual(results.limit_rows(self.rows, 2),
                         [['a', '1'], ['b', '2']])
        self.assertEqual(results.limit_rows(self.rows, 1), [['a', '1']])
        for limit in [None, 0, 3, 10]:
            self.assertEqual(results.limit_rows(self.rows, limit), self.rows)
        self.assertEqual(results.limit_rows([], 1), [])
        self.assertRaises(IllegalArgumentException, results.limit_rows,
                          self.rows, -1)
        self.assertRaises(IllegalArgumentException, results.limit_rows,
                          self.rows, '1')

    def testLimitRowsKeepsInput(self):
        results.limit_rows(self.rows, 1)
        self.assertEqual(len(self.rows), 3)

    def testToDicts(self):
        self.assertEqual(
            results.to_dicts(['name', 'state'], self.rows),
            [{'name': 'a', 'state': '1'}, {'name': 'b', 'state': '2'},
             {'name': 'c', 'state': '3'}])
        # Rows and keys of different lengths.
        self.assertEqual(results.to_dicts(['name'], [['a', '1'], []]),
                         [{'name': 'a'}, {}])
        self.assertEqual(results.to_dicts(None, [['a']]), [{}])

    def testIndexBy(self):
        dicts = results.to_dicts(['name', 'state'], self.rows)
        indexed = results.index_by(dicts, 'name')
        self.assertEqual(sorted(indexed), ['a', 'b', 'c'])
        self.assertEqual(indexed['b'], {'name': 'b', 'state': '2'})

    def testIndexByLastRowWins(self):
        dicts = [{'name': 'a', 'state': '1'}, {'name': 'a', 'state': '2'}]
        self.assertEqual(results.index_by(dicts, 'name')['a']['state'], '2')

    def testIndexByMissingKey(self):
        dicts = [{'name': 'a'}, {'other': 'b'}]
        with self.assertRaises(KeyFieldNotFoundException) as cm:
            results.index_by(dicts, 'name')
        self.assertEqual(cm.exception.get_key_field(), 'name')
        self.assertEqual(cm.exception.get_possible_keys(), ['other'])
        self.assertEqual(
            str(cm.exception),
            'key name not found in result set, possible keys are: other')
        self.assertRaises(IllegalArgumentException, results.index_by,
                          dicts, None)

    def testSelectColumns(self):
        self.assertEqual(results.select_columns(self.rows), ['a', 'b', 'c'])
        self.assertEqual(results.select_columns(self.rows, [2]),
                         ['1', '2', '3'])
        values = results.select_columns(self.rows, [1, 2])
        self.assertEqual(values, ['a', '1', 'b', '2', 'c', '3'])
        self.assertEqual(dict(zip(values[::2], values[1::2])),
                         {'a': '1', 'b': '2', 'c': '3'})
        self.assertEqual(results.select_columns([['a']], [1, 3]),
                         ['a', None])
        self.assertEqual(results.select_columns([], [1, 2]), [])

    def testSelectColumnsIllegal(self):
        self.assertRaises(IllegalArgumentException, results.select_columns,
                          self.rows, [0])
        self.assertRaises(IllegalArgumentException, results.select_columns,
                          self.rows, ['1'])
        self.assertRaises(IllegalArgumentException, results.select_columns,
                          self.rows, 1)

    def testFirst(self):
        self.assertEqual(results.first(self.rows), ['a', '1'])
        self.assertIsNone(results.first([]))
        self.assertIsNone(results.first(None))


if __name__ == '__main__':
    unittest.main()
