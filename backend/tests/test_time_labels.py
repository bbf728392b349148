from datetime import datetime, timedelta

import pytest

from trip_planner.utils.time_labels import since_label

NOW = datetime(2025, 6, 1, 12, 0, 0)


@pytest.mark.parametrize(
    "elapsed,label",
    [
        (timedelta(seconds=0), "just now"),
        (timedelta(seconds=59), "just now"),
        (timedelta(minutes=1), "1 minute ago"),
        (timedelta(minutes=45), "45 minutes ago"),
        (timedelta(hours=5, minutes=10), "5 hours ago"),
        (timedelta(days=1), "1 day ago"),
        (timedelta(days=29), "29 days ago"),
        (timedelta(days=45), "1 month ago"),
        (timedelta(days=400), "1 year ago"),
        (timedelta(days=800), "2 years ago"),
    ],
)
def test_since_label(elapsed, label):
    assert since_label(NOW - elapsed, NOW) == label


def test_since_label_future_reads_just_now():
    """Clock skew between writers must not produce negative labels"""
    assert since_label(NOW + timedelta(minutes=3), NOW) == "just now"
