"""
Movie Watchlist Analytics - Source Package

This package contains the ranking and analytics core of the watchlist tracker:
- movie_records: Movie records, statuses and the stored JSON shape
- movie_scoring: Watch-worthiness score and queue ordering
- watch_stats: Average watch rate, streaks and trend series
- watch_history: History filters, sorting and the watch calendar
- movie_search: Free-text search over records
- utils: Utility functions and configuration constants
"""
