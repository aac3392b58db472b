#!/usr/bin/env python3
"""
Test suite for presenter.py: ordering and rendering diary entries
"""

import io
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from models import DiaryEntry
from presenter import (SortOrder, matches_text, rating_to_stars,
                       render_entry, sort_entries, write_report)
from stats import collect_stats


def entry(name, rating='', **kwargs):
    return DiaryEntry(date=kwargs.pop('date', '2024-01-01'), name=name,
                      rating=rating, **kwargs)


class TestSortEntries:

    def test_alphabetical(self):
        entries = [entry('Zeta'), entry('Alpha'), entry('Mid')]
        result = sort_entries(entries, SortOrder.TITLE)
        assert [e.name for e in result] == ['Alpha', 'Mid', 'Zeta']

    def test_oldest_first_reverses_load_order(self):
        entries = [entry('A'), entry('B'), entry('C')]
        result = sort_entries(entries, SortOrder.OLDEST)
        assert [e.name for e in result] == ['C', 'B', 'A']

    def test_recent_keeps_load_order(self):
        entries = [entry('B'), entry('A')]
        assert sort_entries(entries) == entries
        assert sort_entries(entries) is not entries

    def test_highest_rated_unrated_last(self):
        entries = [
            entry('Unrated'),
            entry('Three', '3'),
            entry('Five', '5'),
            entry('Junk', 'x'),
            entry('Half', '4.5'),
        ]
        result = sort_entries(entries, SortOrder.RATING)
        assert [e.name for e in result] == [
            'Five', 'Half', 'Three', 'Unrated', 'Junk'
        ]

    def test_rating_ties_keep_load_order(self):
        entries = [entry('First', '4'), entry('Second', '4'), entry('Third', '4')]
        result = sort_entries(entries, SortOrder.RATING)
        assert [e.name for e in result] == ['First', 'Second', 'Third']

    def test_title_ties_keep_load_order(self):
        entries = [entry('Heat', date='2'), entry('Heat', date='1')]
        result = sort_entries(entries, SortOrder.TITLE)
        assert [e.date for e in result] == ['2', '1']

    def test_does_not_mutate_input(self):
        entries = [entry('B'), entry('A')]
        sort_entries(entries, SortOrder.TITLE)
        assert [e.name for e in entries] == ['B', 'A']


class TestRatingToStars:

    def test_half_star(self):
        assert rating_to_stars('4.5') == '****½ (4.5/5)'

    def test_whole_stars(self):
        assert rating_to_stars('3') == '*** (3/5)'

    def test_half_only(self):
        assert rating_to_stars('0.5') == '½ (0.5/5)'

    @pytest.mark.parametrize('rating', ['5', '5.5', '9e9', '1e300'])
    def test_stars_capped_at_five(self, rating):
        assert rating_to_stars(rating) == f'***** ({rating}/5)'

    def test_huge_rating_still_reports(self):
        entries = [entry('Heat', '1e300'), entry('Ran', '9e9')]
        out = io.StringIO()
        write_report(entries, collect_stats(entries), out)
        assert '   Rating: ***** (1e300/5)' in out.getvalue()
        assert 'Total movies watched: 2' in out.getvalue()

    @pytest.mark.parametrize('rating', ['', '0', '0.0', 'abc', '-1'])
    def test_no_stars(self, rating):
        assert rating_to_stars(rating) == ''


class TestRenderEntry:

    def test_full_entry(self):
        e = DiaryEntry(
            date='2024-01-01',
            name='Heat',
            year='1995',
            rating='4.5',
            rewatch='Yes',
            tags='crime, la',
            watched_date='2023-12-31',
        )
        assert render_entry(e, 3) == '\n'.join([
            '3. Heat (1995)',
            '   Watched: 2023-12-31',
            '   Rating: ****½ (4.5/5)',
            '   [REWATCH]',
            '   Tags: crime, la',
        ])

    def test_falls_back_to_diary_date(self):
        e = DiaryEntry(date='2024-01-01', name='Heat')
        assert '   Watched: 2024-01-01' in render_entry(e, 1)

    def test_minimal_entry(self):
        e = DiaryEntry(date='', name='Heat', rating='0', rewatch='No')
        assert render_entry(e, 1) == '1. Heat'


class TestMatchesText:

    def test_empty_query_matches(self):
        assert matches_text(entry('Heat'), '')

    def test_title_case_insensitive(self):
        assert matches_text(entry('Heat'), 'hEa')

    def test_year(self):
        assert matches_text(entry('Heat', year='1995'), '199')

    def test_no_match(self):
        assert not matches_text(entry('Heat', year='1995'), 'ran')


class TestWriteReport:

    def test_report_lists_entries_then_stats(self):
        entries = [entry('Heat', '5', rewatch='Yes'), entry('Ran')]
        out = io.StringIO()
        write_report(entries, collect_stats(entries), out)
        text = out.getvalue()

        assert text.index('1. Heat') < text.index('2. Ran')
        assert 'Total movies watched: 2' in text
        assert 'Average rating: 5.00/5 (based on 1 rated films)' in text
        assert 'Rewatches: 1' in text
