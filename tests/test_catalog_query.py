#!/usr/bin/env python3
"""
Test Suite for the catalog query engine

TEST COVERAGE:
    - Facet filtering (category, max price, min rating) and its order
    - Free-text search dominance over facets
    - Sorting stability and idempotence
    - Reveal-window growth rule
    - Argument validation at the call boundary

USAGE:
    Run from project root: python -m pytest tests/test_catalog_query.py -v
"""

import math
import unittest
from unittest.mock import patch

from storefront.catalog.query import (
    ALL_CATEGORIES,
    FilterState,
    SortKey,
    advance_window,
    category_facets,
    filter_products,
    parse_sort_key,
    query_catalog,
    sort_products,
)
from storefront.data.fixtures import load_products
from storefront.data.models import Product
from storefront.utils.errors import InvalidArgumentError


def ids(products):
    return [p.id for p in products]


class TestFilterProducts(unittest.TestCase):

    def setUp(self):
        self.products = load_products()

    def test_unbounded_filters_return_everything_in_order(self):
        result = filter_products(self.products, FilterState.unbounded())
        self.assertEqual(ids(result), ids(self.products))

    def test_default_sidebar_shows_all_eight(self):
        result = filter_products(self.products, FilterState(category="All", price=200, rating=0))
        self.assertEqual(len(result), 8)

    def test_category_filter(self):
        result = filter_products(self.products, FilterState(category="Accessories", price=200))
        self.assertEqual(ids(result), [7, 8])

    def test_max_price_is_inclusive(self):
        result = filter_products(self.products, FilterState(price=45.50))
        self.assertEqual(ids(result), [2, 5, 7, 8])

    def test_min_rating_is_inclusive(self):
        result = filter_products(self.products, FilterState(price=math.inf, rating=5))
        self.assertEqual(ids(result), [3, 4, 6, 7, 8])

    def test_facets_combine(self):
        result = filter_products(self.products, FilterState(category="Accessories", price=20, rating=4))
        self.assertEqual(ids(result), [7])

    def test_unknown_category_is_empty_not_an_error(self):
        self.assertEqual(filter_products(self.products, FilterState(category="Drones")), [])

    def test_zero_price_excludes_paid_products(self):
        free = Product(id=99, name="Sticker", category="Accessories", price=0)
        result = filter_products(self.products + [free], FilterState(price=0))
        self.assertEqual(ids(result), [99])

    def test_search_pro_ignores_facets(self):
        restrictive = FilterState(category="Speakers", price=0, rating=5)
        result = filter_products(self.products, restrictive, "pro")
        self.assertEqual(ids(result), [1, 8])
        for p in result:
            self.assertTrue("pro" in p.name.lower() or "pro" in p.description.lower())

    def test_search_matches_description_case_insensitively(self):
        result = filter_products(self.products, FilterState(), "POWER BANK")
        self.assertEqual(ids(result), [2])

    def test_search_returns_only_matches(self):
        query = "wireless"
        result = filter_products(self.products, FilterState.unbounded(), query)
        expected = [p.id for p in self.products
                    if query in p.name.lower() or query in p.description.lower()]
        self.assertEqual(ids(result), expected)

    def test_blank_search_falls_back_to_facets(self):
        result = filter_products(self.products, FilterState(category="Accessories"), "   ")
        self.assertEqual(ids(result), [7, 8])

    def test_search_without_matches_is_empty(self):
        self.assertEqual(filter_products(self.products, FilterState(), "toaster"), [])

    def test_input_is_not_mutated(self):
        before = [p.model_dump() for p in self.products]
        filter_products(self.products, FilterState(category="Accessories"), "")
        self.assertEqual([p.model_dump() for p in self.products], before)

    def test_negative_price_rejected(self):
        with self.assertRaises(ValueError):
            FilterState(price=-1)

    def test_bypassed_validation_still_rejected(self):
        bad = FilterState.model_construct(category="All", price=-5.0, rating=0.0)
        with self.assertRaises(InvalidArgumentError):
            filter_products(self.products, bad)
        bad = FilterState.model_construct(category="All", price=10.0, rating=7.0)
        with self.assertRaises(InvalidArgumentError):
            filter_products(self.products, bad)


class TestSortProducts(unittest.TestCase):

    def setUp(self):
        self.products = load_products()

    def test_featured_keeps_order(self):
        self.assertEqual(ids(sort_products(self.products, SortKey.featured)), ids(self.products))

    def test_price_ascending(self):
        self.assertEqual(ids(sort_products(self.products, "price-asc")), [7, 8, 5, 2, 4, 1, 3, 6])

    def test_price_descending(self):
        self.assertEqual(ids(sort_products(self.products, "price-desc")), [6, 3, 1, 4, 2, 5, 8, 7])

    def test_rating_descending_is_stable(self):
        self.assertEqual(ids(sort_products(self.products, "rating-desc")), [3, 4, 6, 7, 8, 1, 2, 5])

    def test_name_ascending(self):
        self.assertEqual(ids(sort_products(self.products, "name-asc")), [6, 4, 7, 5, 8, 1, 2, 3])

    def test_name_sort_ignores_case(self):
        named = [Product(id=i, name=n, category="X", price=1) for i, n in ((1, "beta"), (2, "Alpha"), (3, "gamma"))]
        self.assertEqual(ids(sort_products(named, "name-asc")), [2, 1, 3])

    def test_name_sort_uses_locale_collation(self):
        named = [Product(id=1, name="Ezra Stand", category="X", price=1),
                 Product(id=2, name="\u00c9clair Lamp", category="X", price=1)]
        with patch("storefront.catalog.query.locale.strxfrm", side_effect=lambda s: s.replace("\u00e9", "e")):
            self.assertEqual(ids(sort_products(named, "name-asc")), [2, 1])

    def test_equal_prices_keep_input_order_both_ways(self):
        twins = [Product(id=i, name=f"P{i}", category="X", price=10) for i in (3, 1, 2)]
        self.assertEqual(ids(sort_products(twins, "price-asc")), [3, 1, 2])
        self.assertEqual(ids(sort_products(twins, "price-desc")), [3, 1, 2])

    def test_idempotent_and_permutation(self):
        for key in SortKey:
            once = sort_products(self.products, key)
            twice = sort_products(once, key)
            self.assertEqual(ids(once), ids(twice), key)
            self.assertEqual(sorted(ids(once)), sorted(ids(self.products)), key)

    def test_unknown_sort_key(self):
        with self.assertRaises(InvalidArgumentError):
            sort_products(self.products, "popularity")
        with self.assertRaises(InvalidArgumentError):
            parse_sort_key("")

    def test_query_catalog_filters_then_sorts(self):
        result = query_catalog(self.products, FilterState(price=50), "price-desc")
        self.assertEqual(ids(result), [2, 5, 8, 7])


class TestAdvanceWindow(unittest.TestCase):

    def test_grows_by_increment(self):
        self.assertEqual(advance_window(9, 30, 6), 15)

    def test_stops_at_total(self):
        self.assertEqual(advance_window(9, 12, 6), 12)

    def test_full_window_unchanged(self):
        self.assertEqual(advance_window(9, 8, 6), 9)
        self.assertEqual(advance_window(12, 12, 6), 12)

    def test_never_exceeds_total_when_growing(self):
        for total in range(10, 40):
            size = 9
            while size < total:
                size = advance_window(size, total, 6)
                self.assertLessEqual(size, total)

    def test_invalid_arguments(self):
        with self.assertRaises(InvalidArgumentError):
            advance_window(-1, 10, 6)
        with self.assertRaises(InvalidArgumentError):
            advance_window(9, 10, 0)


class TestCategoryFacets(unittest.TestCase):

    def test_first_seen_order(self):
        self.assertEqual(category_facets(load_products()), [
            ALL_CATEGORIES, "Earbuds", "Power Banks", "Smart Watches", "Speakers",
            "Chargers", "Headphones", "Accessories",
        ])

    def test_empty_catalog(self):
        self.assertEqual(category_facets([]), [ALL_CATEGORIES])


if __name__ == "__main__":
    unittest.main()
