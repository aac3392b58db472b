from dataclasses import dataclass

from parsers.fields import safe_float

FIELD_NAMES = (
    'date',
    'name',
    'year',
    'letterboxd_uri',
    'rating',
    'rewatch',
    'tags',
    'watched_date',
)


@dataclass(frozen=True)
class DiaryEntry:
    date: str
    name: str
    year: str = ''
    letterboxd_uri: str = ''
    rating: str = ''  # 0-5 in half steps, may be empty
    rewatch: str = ''
    tags: str = ''
    watched_date: str = ''

    @property
    def rating_value(self) -> float:
        return safe_float(self.rating)

    @property
    def rewatched(self):
        return self.rewatch not in ('', 'No')

    @property
    def display_date(self) -> str:
        '''Watched date if logged, otherwise the diary date.'''
        return self.watched_date or self.date
