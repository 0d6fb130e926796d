from collections.abc import Iterable
from datetime import date

from src.domain.entities import PageRow, PageStatus, UserStatistics


def page_status(release_date: date | None, today: date) -> PageStatus:
    """
    Derive a page's status from its release date.

    No release date means the page is still a draft. A release date in the
    future schedules it; today or earlier publishes it.
    """
    if release_date is None:
        return "Draft"
    if release_date > today:
        return "Programmed"
    return "Published"


def is_published(release_date: date | None, today: date) -> bool:
    return page_status(release_date, today) == "Published"


def compute_statistics(rows: Iterable[PageRow], today: date) -> UserStatistics:
    """
    Aggregate one user's page counters from raw page rows.

    Deleted pages only count toward `created` and `removed`; the remaining
    pages are split by status, so the four buckets always add up to `created`.
    """
    stats = UserStatistics()
    for row in rows:
        stats.created += 1
        if row.deleted:
            stats.removed += 1
            continue

        status = page_status(row.release_date, today)
        if status == "Draft":
            stats.draft += 1
        elif status == "Programmed":
            stats.programmed += 1
        else:
            stats.published += 1
    return stats
