#!/usr/bin/env python3
"""
Test Suite for page slicing and the page-number window

USAGE:
    Run from project root: python -m pytest tests/test_pagination.py -v
"""

import unittest

from storefront.catalog.pagination import page_numbers, paginate, total_pages
from storefront.utils.errors import InvalidArgumentError


class TestPagination(unittest.TestCase):

    def setUp(self):
        self.items = list(range(1, 24))  # 23 items

    def test_total_pages(self):
        self.assertEqual(total_pages(23, 10), 3)
        self.assertEqual(total_pages(20, 10), 2)
        self.assertEqual(total_pages(0, 10), 0)

    def test_first_and_last_page(self):
        first = paginate(self.items, 1, 10)
        self.assertEqual(first.items, list(range(1, 11)))
        self.assertEqual(first.total_pages, 3)
        self.assertEqual(first.total_items, 23)

        last = paginate(self.items, 3, 10)
        self.assertEqual(last.items, [21, 22, 23])

    def test_empty_list_has_a_first_page(self):
        page = paginate([], 1, 10)
        self.assertEqual(page.items, [])
        self.assertEqual(page.total_pages, 0)
        self.assertEqual(page.page_numbers, [])

    def test_out_of_range_pages(self):
        with self.assertRaises(InvalidArgumentError):
            paginate(self.items, 0, 10)
        with self.assertRaises(InvalidArgumentError):
            paginate(self.items, 4, 10)
        with self.assertRaises(InvalidArgumentError):
            paginate([], 2, 10)

    def test_bad_page_size(self):
        with self.assertRaises(InvalidArgumentError):
            paginate(self.items, 1, 0)


class TestPageNumbers(unittest.TestCase):

    def test_single_page_needs_no_control(self):
        self.assertEqual(page_numbers(1, 1), [])
        self.assertEqual(page_numbers(1, 0), [])

    def test_fewer_pages_than_buttons(self):
        self.assertEqual(page_numbers(2, 3), [1, 2, 3])

    def test_window_centred_on_current(self):
        self.assertEqual(page_numbers(5, 10), [3, 4, 5, 6, 7])

    def test_window_at_start(self):
        self.assertEqual(page_numbers(1, 10), [1, 2, 3, 4, 5])

    def test_window_shifted_near_end(self):
        self.assertEqual(page_numbers(10, 10), [6, 7, 8, 9, 10])
        self.assertEqual(page_numbers(9, 10), [6, 7, 8, 9, 10])


if __name__ == "__main__":
    unittest.main()
