import enum
import math
import sys
from typing import TextIO

from models import DiaryEntry
from parsers.fields import safe_float
from stats import DiaryStats, render_stats

FULL_STAR = '*'
HALF_STAR = '½'
MAX_STARS = 5


class SortOrder(enum.Enum):
    RECENT = 'recent'
    OLDEST = 'oldest'
    TITLE = 'title'
    RATING = 'rating'

    @property
    def label(self):
        return {
            SortOrder.RECENT: 'Most recent first (default)',
            SortOrder.OLDEST: 'Oldest first',
            SortOrder.TITLE: 'Alphabetically by title',
            SortOrder.RATING: 'Highest rated first',
        }[self]


def sort_entries(
    entries: list[DiaryEntry],
    order: SortOrder = SortOrder.RECENT,
) -> list[DiaryEntry]:
    '''
    Return a reordered copy of the entries.

    Diary exports are already newest first, so RECENT keeps load order and
    OLDEST reverses it. The sorted orders are stable on ties.
    '''
    if order is SortOrder.OLDEST:
        return list(reversed(entries))
    if order is SortOrder.TITLE:
        return sorted(entries, key=lambda e: e.name)
    if order is SortOrder.RATING:
        return sorted(entries, key=lambda e: e.rating_value, reverse=True)
    return list(entries)


def rating_to_stars(rating: str) -> str:
    value = safe_float(rating)
    if value <= 0:
        return ''

    full = min(math.floor(value), MAX_STARS)
    stars = FULL_STAR * full
    if full < MAX_STARS and value - full >= 0.5:
        stars += HALF_STAR
    return f'{stars} ({rating}/5)'


def render_entry(entry: DiaryEntry, position: int) -> str:
    '''Render a single entry as an indented text block.'''
    out = f'{position}. {entry.name}'
    if entry.year:
        out += f' ({entry.year})'

    lines = [out]

    if entry.display_date:
        lines.append(f'   Watched: {entry.display_date}')

    if stars := rating_to_stars(entry.rating):
        lines.append(f'   Rating: {stars}')

    if entry.rewatched:
        lines.append('   [REWATCH]')

    if entry.tags:
        lines.append(f'   Tags: {entry.tags}')

    return '\n'.join(lines)


def render_entries(entries: list[DiaryEntry]) -> list[str]:
    return [render_entry(e, i) for i, e in enumerate(entries, start=1)]


def matches_text(entry: DiaryEntry, q: str) -> bool:
    if not q:
        return True
    q = q.lower()
    return q in entry.name.lower() or q in entry.year.lower()


def write_report(
    entries: list[DiaryEntry],
    stats: DiaryStats,
    out: TextIO | None = None,
):
    '''Write rendered entries followed by the summary statistics.'''
    out = out or sys.stdout

    for block in render_entries(entries):
        print(block, file=out)
        print(file=out)

    print('=' * 40, file=out)
    for line in render_stats(stats):
        print(line, file=out)
