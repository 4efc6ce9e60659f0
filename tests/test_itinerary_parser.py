import pytest

from itinerary_parser import (
    DEFAULT_DURATION,
    extract_title,
    fallback_activities,
    parse_duration,
    parse_itinerary,
)

SAMPLE = "Day 1: Arrival\n- Visit museum\n- Eat lunch\nDay 2: Departure\n* Go home"


def test_no_day_markers_gives_three_synthetic_days() -> None:
    days, duration = parse_itinerary("Just wander around and enjoy the food.", "Lisbon")

    assert duration == DEFAULT_DURATION
    assert [d.day for d in days] == [1, 2, 3]
    assert [d.title for d in days] == [
        "Day 1 - Exploring Lisbon",
        "Day 2 - Exploring Lisbon",
        "Day 3 - Exploring Lisbon",
    ]
    assert all(d.activities == fallback_activities("Lisbon") for d in days)


def test_empty_text_degrades_to_fallback() -> None:
    days, duration = parse_itinerary("", "Tokyo, Japan")

    assert duration == "5 Days"
    assert len(days) == 3


def test_sample_two_days_plus_padding() -> None:
    days, _ = parse_itinerary(SAMPLE, "Paris")

    assert len(days) == 3
    assert days[0].day == 1
    assert days[0].title == "Arrival"
    assert days[0].activities == ["Visit museum", "Eat lunch"]
    assert days[1].day == 2
    assert days[1].title == "Departure"
    assert days[1].activities == ["Go home"]
    assert days[2].day == 3
    assert days[2].title == "Day 3 - Exploring Paris"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("A perfect 7 days in Japan", "7 Days"),
        ("A perfect 7 DAYS in Japan", "7 Days"),
        ("Duration: 3 day trip, not 10 days", "3 Days"),
        ("Our 4-day itinerary", "4 Days"),
        ("Day 1: Arrival\nDay 2: Museums", "5 Days"),
        ("no numbers here at all", "5 Days"),
    ],
)
def test_parse_duration(text: str, expected: str) -> None:
    assert parse_duration(text) == expected


def test_day_numbers_follow_position_not_text() -> None:
    text = "Intro text\nDay 5: Beach\n- Swim\nDay 9: Hike\n- Climb"
    days, _ = parse_itinerary(text, "Bali")

    assert [d.day for d in days] == [1, 2, 3]
    assert days[0].title == "Beach"
    assert days[1].title == "Hike"


def test_weekday_names_do_not_open_a_day() -> None:
    text = "Intro\nSunday 3pm brunch\n- Eat\nDay 1: Beach\n- Swim"
    days, _ = parse_itinerary(text, "Bali")

    assert days[0].title == "Beach"
    assert days[0].activities == ["Swim"]
    assert days[1].title == "Day 2 - Exploring Bali"


def test_duration_does_not_cross_lines() -> None:
    assert parse_duration("Day 1\nDay 2: Museums") == "5 Days"


def test_bare_day_markers_on_consecutive_lines() -> None:
    days, duration = parse_itinerary("Day 1\nDay 2: Museums", "Paris")

    assert duration == "5 Days"
    assert days[0].title == "Day 1 in Paris"
    assert days[1].title == "Museums"
    assert days[0].activities == fallback_activities("Paris")


def test_preamble_is_not_a_day() -> None:
    text = "Title: Rome Rush\nDuration: 2 days\n- pack light\nDay 1: Colosseum\n- Tour"
    days, duration = parse_itinerary(text, "Rome")

    assert duration == "2 Days"
    assert days[0].title == "Colosseum"
    assert days[0].activities == ["Tour"]


def test_keeps_at_most_seven_days() -> None:
    text = "\n".join(f"Day {i}: Stop {i}\n- thing {i}" for i in range(1, 10))
    days, _ = parse_itinerary(text, "Peru")

    assert len(days) == 7
    assert [d.title for d in days] == [f"Stop {i}" for i in range(1, 8)]


def test_activities_capped_and_markers_stripped() -> None:
    text = "Day 1: Big one\n- a\n  • b\n* c\n-   d\n- e\nplain line"
    days, _ = parse_itinerary(text, "Oslo")

    assert days[0].activities == ["a", "b", "c", "d"]


def test_day_without_bullets_uses_fallback_activities() -> None:
    text = "Day 1: Slow day\nSleep in and relax"
    days, _ = parse_itinerary(text, "Kyoto")

    assert days[0].title == "Slow day"
    assert days[0].activities == fallback_activities("Kyoto")


def test_empty_section_gets_synthesized_title() -> None:
    text = "Day 1: Start\n- Walk\nDay 2\nDay 3: End\n- Fly"
    days, _ = parse_itinerary(text, "Seoul")

    assert days[1].title == "Day 2 in Seoul"
    assert days[1].activities == fallback_activities("Seoul")
    assert days[2].title == "End"


def test_title_colons_and_hyphens_stripped() -> None:
    days, _ = parse_itinerary("Day 1 - : Old Town\n- Stroll", "Prague")

    assert days[0].title == "Old Town"


@pytest.mark.parametrize(
    "text",
    [
        "",
        "day",
        "day1",
        "Day 1:\n\n\n",
        "- - -\n* * *",
        "DAY 1: x\n- \n- -\nday 2: y",
        "Sunday 3pm brunch then day 4 beach\n•",
        "\n".join(f"day {i}\n" + "- a\n" * 10 for i in range(20)),
    ],
)
def test_invariants_hold_for_messy_input(text: str) -> None:
    days, duration = parse_itinerary(text, "Somewhere")

    assert len(days) >= 3
    assert [d.day for d in days] == list(range(1, len(days) + 1))
    assert duration.endswith(" Days")
    for d in days:
        assert d.title
        assert 1 <= len(d.activities) <= 4
        assert all(a for a in d.activities)


def test_extract_title_prefers_title_line() -> None:
    text = "# Big Heading\nTitle: **Tokyo Hidden Gems**\nDay 1: Go"
    assert extract_title(text, "Tokyo") == "Tokyo Hidden Gems"


def test_extract_title_uses_first_non_day_heading() -> None:
    text = "## Day 1: Arrival\n## Lisbon on a Budget\n- eat"
    assert extract_title(text, "Lisbon") == "Lisbon on a Budget"


def test_extract_title_falls_back_to_location() -> None:
    assert extract_title("Day 1: Arrival\n- Walk", "Hanoi, Vietnam") == "Hanoi, Vietnam Travel Itinerary"
