from datetime import UTC, datetime, timedelta

import pytest

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=UTC)


@pytest.mark.parametrize(
    ("age", "expected"),
    [
        (timedelta(seconds=20), "just now"),
        (timedelta(minutes=1), "1 minute ago"),
        (timedelta(minutes=42), "42 minutes ago"),
        (timedelta(hours=1, minutes=5), "1 hour ago"),
        (timedelta(hours=23), "23 hours ago"),
        (timedelta(days=1, hours=3), "yesterday"),
        (timedelta(days=4), "4 days ago"),
        (timedelta(days=7), "1 week ago"),
        (timedelta(days=20), "2 weeks ago"),
        (timedelta(days=31), "1 month ago"),
        (timedelta(days=200), "6 months ago"),
        (timedelta(days=800), "2 years ago"),
    ],
)
def test_age_description(make_project, age, expected):
    project = make_project("p1", created_at=NOW - age)

    assert project.get_age_description(NOW) == expected


def test_future_timestamp_reads_as_just_now(make_project):
    project = make_project("p1", created_at=NOW + timedelta(minutes=5))

    assert project.get_age_description(NOW) == "just now"


def test_naive_timestamp_is_treated_as_utc(make_project):
    project = make_project("p1", created_at=(NOW - timedelta(hours=3)).replace(tzinfo=None))

    assert project.get_age_description(NOW) == "3 hours ago"
