from schedconvert.calendar import day_badge, event_count_text, format_time_range, month_badge


def test_display_strings(record):
    assert format_time_range(record) == "19:00 - 21:00"
    assert month_badge(record) == "NOV"
    assert day_badge(record) == "9"


def test_event_count_text(record, bare_record):
    assert event_count_text([]) == "0 items"
    assert event_count_text([record, bare_record]) == "2 items"
