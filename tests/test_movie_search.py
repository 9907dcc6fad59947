"""
Unit tests for watchlist search.
"""

import unittest
import sys
import os
from datetime import datetime

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from movie_records import MovieRecord, MovieStatus
from movie_search import matches_query, search_records


class TestMovieSearch(unittest.TestCase):

    def setUp(self):
        added = datetime(2024, 1, 1)
        self.arrival = MovieRecord(id="1", status=MovieStatus.QUEUED, priority=3, fun=3,
                                   date_added=added, name="Arrival",
                                   director="Denis Villeneuve", actors="Amy Adams")
        self.heat = MovieRecord(id="2", status=MovieStatus.QUEUED, priority=3, fun=3,
                                date_added=added, name="Heat",
                                director="Michael Mann", actors="Al Pacino, Robert De Niro")
        self.untitled = MovieRecord(id="3", status=MovieStatus.QUEUED, priority=3, fun=3,
                                    date_added=added)

    def test_matches_name_case_insensitive(self):
        self.assertTrue(matches_query(self.arrival, "ARRIV"))
        self.assertFalse(matches_query(self.heat, "arrival"))

    def test_matches_director_and_actors(self):
        self.assertTrue(matches_query(self.arrival, "villeneuve"))
        self.assertTrue(matches_query(self.heat, "de niro"))

    def test_missing_fields_do_not_match(self):
        self.assertFalse(matches_query(self.untitled, "mann"))

    def test_blank_query_matches_all(self):
        records = [self.arrival, self.heat, self.untitled]
        self.assertEqual(search_records(records, ""), records)
        self.assertEqual(search_records(records, "   "), records)
        self.assertEqual(search_records(records, None), records)

    def test_search_keeps_order(self):
        records = [self.heat, self.arrival]
        self.assertEqual(search_records(records, "a"), [self.heat, self.arrival])
        self.assertEqual(search_records(records, "pacino"), [self.heat])


if __name__ == '__main__':
    unittest.main()
