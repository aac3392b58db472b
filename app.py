import io
from pathlib import Path

import altair as alt
import streamlit as st
from st_keyup import st_keyup

from diary import DIARY_CSV
from models import DiaryEntry
from parsers.diary import DiaryLoad, parse_diary, parse_diary_lines
from presenter import SortOrder, matches_text, rating_to_stars, sort_entries
from stats import (collect_stats, entries_frame, rating_distribution,
                   release_year_counts)


@st.cache_data
def load_uploaded(data: bytes) -> DiaryLoad:
    text = data.decode('utf-8-sig', errors='replace')
    return parse_diary_lines(io.StringIO(text, newline='\n'))


@st.cache_data
def load_path(path: str) -> DiaryLoad:
    return parse_diary(path)


def main():
    st.set_page_config(
        page_title="Letterboxd Diary", page_icon="🎥", layout="centered"
    )
    st.title("🎬 Letterboxd Diary")

    uploaded = st.file_uploader(f"Upload {DIARY_CSV}", type=["csv"])
    if uploaded is not None:
        load = load_uploaded(uploaded.getvalue())
    else:
        path = st.text_input("...or enter a path", value=DIARY_CSV)
        if not path or not Path(path).exists():
            st.info(f"Upload your {DIARY_CSV} export to get started.")
            st.stop()
        load = load_path(path)

    if load.error:
        st.error(load.error)
    for warning in load.warnings:
        st.warning(warning)

    entries = load.entries
    if not entries:
        st.info("No movies found. Make sure you selected diary.csv.")
        st.stop()

    render_stats(entries)

    tab_list, tab_table, tab_hist = st.tabs(["List", "Table", "Histogram"])

    with tab_list:
        render_tab_list(entries)

    with tab_table:
        render_tab_table(entries)

    with tab_hist:
        render_tab_histogram(entries)


def render_stats(entries: list[DiaryEntry]):
    stats = collect_stats(entries)
    col_total, col_avg, col_rewatch = st.columns(3)
    col_total.metric("Movies watched", stats.total)
    col_avg.metric(
        "Average rating",
        f"{stats.mean_rating:.2f}/5" if stats.rated else "–",
        help=f"Based on {stats.rated} rated films",
    )
    col_rewatch.metric("Rewatches", stats.rewatches)


def render_tab_list(entries: list[DiaryEntry]):
    order = st.radio(
        "Sort by",
        list(SortOrder),
        format_func=lambda o: o.label,
        horizontal=True,
    )

    query = st_keyup(
        "Search",
        key="query",
        placeholder="Type to filter...",
    ) or ""

    filtered = [e for e in sort_entries(entries, order) if matches_text(e, query)]

    render_diary_list(filtered)
    st.caption(f"Showing {len(filtered)} of {len(entries)}")


def render_diary_list(entries: list[DiaryEntry]):
    '''Renders a numbered list of diary entries'''

    lines = []
    for num, e in enumerate(entries, start=1):
        # Escape asterisks from markdown
        out = f"**{e.name.replace('*', '&#42;')}**"

        if e.letterboxd_uri:
            out = f"[{out}]({e.letterboxd_uri})"

        if e.year:
            out += f" · *{e.year}*"

        if stars := rating_to_stars(e.rating):
            out += f" &nbsp;{stars.replace('*', '★')}"

        if e.rewatched:
            out += " ↻"

        if e.display_date:
            out += f" <small>{e.display_date}</small>"

        if e.tags:
            out += f" <small>`{e.tags}`</small>"

        lines.append(f"{num}. {out}")

    st.markdown('\n'.join(lines), unsafe_allow_html=True)


def render_tab_table(entries: list[DiaryEntry]):
    df = entries_frame(entries)
    df_display = df.loc[:, [
        'display_date', 'name', 'year', 'rating_value', 'rewatched', 'tags',
        'letterboxd_uri'
    ]].rename(
        columns={
            "display_date": "Watched",
            "name": "Title",
            "year": "Release Year",
            "rating_value": "Rating",
            "rewatched": "Rewatch",
            "tags": "Tags",
            "letterboxd_uri": "Link",
        }
    )
    st.dataframe(
        df_display,
        hide_index=True,
        height=min(35 * 100, 35 * (len(df_display) + 1)),
        column_config={
            'Link': st.column_config.LinkColumn(display_text='Letterboxd')
        }
    )


def render_tab_histogram(entries: list[DiaryEntry]):
    dist = rating_distribution(entries)

    if dist.is_empty():
        st.info("No rated movies.")
    else:
        df_ratings = dist.to_pandas()
        chart_ratings = (
            alt.Chart(df_ratings).mark_bar().encode(
                x=alt.X("rating:O", title="Rating"),
                y=alt.Y("count", title="Count"),
            )
        )
        st.subheader("Rating Distribution")
        st.altair_chart(chart_ratings, use_container_width=True)

    df_counts = release_year_counts(entries)
    if df_counts.empty:
        st.info("No movies with year information.")
        return

    chart_years = (
        alt.Chart(df_counts).mark_bar().encode(
            x=alt.X("Year:O", sort="ascending", axis=alt.Axis(labelAngle=-45)),
            y="Count"
        )
    )

    st.subheader("Number of Films by Release Date")
    st.altair_chart(chart_years, use_container_width=True)


if __name__ == '__main__':
    main()
