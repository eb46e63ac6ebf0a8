"""Archive page layout: years and months newest first, per-year expand state."""

from collections.abc import Iterable

from folio.models.post import Archive, ArchiveMonth, ArchiveYear

MONTH_NAMES = {
    "01": "January",
    "02": "February",
    "03": "March",
    "04": "April",
    "05": "May",
    "06": "June",
    "07": "July",
    "08": "August",
    "09": "September",
    "10": "October",
    "11": "November",
    "12": "December",
}


def toggle_year(expanded: frozenset[str], year: str) -> frozenset[str]:
    """Flip one year's expanded flag, leaving the others alone."""
    if year in expanded:
        return expanded - {year}
    return expanded | {year}


def layout_archive(archive: Archive, expanded: Iterable[str] = ()) -> list[ArchiveYear]:
    """Lay out archive buckets for display.

    Years and months sort descending as strings, which is chronological
    for zero-padded keys. Collapsed years carry their post count but no
    months.
    """
    expanded = frozenset(expanded)
    years: list[ArchiveYear] = []
    for year in sorted(archive, reverse=True):
        months = archive[year]
        is_expanded = year in expanded
        years.append(
            ArchiveYear(
                year=year,
                expanded=is_expanded,
                post_count=sum(len(posts) for posts in months.values()),
                months=[
                    ArchiveMonth(
                        month=month,
                        name=MONTH_NAMES.get(month, month),
                        posts=months[month],
                    )
                    for month in sorted(months, reverse=True)
                ]
                if is_expanded
                else [],
            )
        )
    return years
