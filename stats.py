from dataclasses import dataclass

import pandas as pd
import polars as pl

from models import DiaryEntry


@dataclass(frozen=True)
class DiaryStats:
    total: int
    rated: int
    mean_rating: float | None
    rewatches: int


def entries_frame(entries: list[DiaryEntry]) -> pd.DataFrame:
    '''One row per entry, with the derived rating, rewatch and date columns.'''
    df = pd.DataFrame(
        [
            e.__dict__ | {
                'rating_value': e.rating_value,
                'rewatched': e.rewatched,
                'display_date': e.display_date,
            } for e in entries
        ],
        columns=[
            'date', 'name', 'year', 'letterboxd_uri', 'rating', 'rewatch',
            'tags', 'watched_date', 'rating_value', 'rewatched', 'display_date'
        ],
    )
    return df


def collect_stats(entries: list[DiaryEntry]) -> DiaryStats:
    df = entries_frame(entries)

    ratings = df.loc[df['rating_value'] > 0, 'rating_value']
    rated = len(ratings)
    mean_rating = float(ratings.sum()) / rated if rated else None

    return DiaryStats(
        total=len(df),
        rated=rated,
        mean_rating=mean_rating,
        rewatches=int(df['rewatched'].sum()),
    )


def render_stats(stats: DiaryStats) -> list[str]:
    lines = [f'Total movies watched: {stats.total}']

    if stats.rated:
        lines.append(
            f'Average rating: {stats.mean_rating:.2f}/5 '
            f'(based on {stats.rated} rated films)'
        )

    if stats.rewatches:
        lines.append(f'Rewatches: {stats.rewatches}')

    return lines


def rating_distribution(entries: list[DiaryEntry]) -> pl.DataFrame:
    '''Count rated entries per rating value, lowest rating first.'''
    ratings = pl.DataFrame(
        {'rating': [e.rating_value for e in entries]},
        schema={'rating': pl.Float64},
    )
    return (
        ratings.filter(pl.col('rating') > 0)
        .group_by('rating')
        .agg(pl.len().alias('count'))
        .sort('rating')
    )


def release_year_counts(entries: list[DiaryEntry]) -> pd.DataFrame:
    '''Films per release year, with empty years between filled in as zero.'''
    years = [int(e.year) for e in entries if e.year.isdecimal()]
    if not years:
        return pd.DataFrame({'Year': [], 'Count': []}, dtype=int)

    df_years = pd.DataFrame(years, columns=['Year'])
    all_years = pd.DataFrame({'Year': range(min(years), max(years) + 1)})

    df_counts = df_years.value_counts().reset_index(name='Count')
    df_counts = (
        all_years.merge(df_counts, on='Year',
                        how='left').fillna(0).astype({'Count': int})
    )
    return df_counts
