"""Tests for series detection from slug suffixes."""

from postgraph.services.series import (
    detect_series,
    is_series_member,
    series_key,
    series_order,
)


def test_numeric_suffix_is_series_order():
    assert series_order("dev/2019/01/05/react-hooks_3") == 3


def test_trailing_slash_is_ignored():
    assert series_order("dev/react-hooks_2/") == 2


def test_non_numeric_suffix_is_not_series():
    assert series_order("dev/react_hooks") == 0
    assert series_order("dev/react_") == 0
    assert series_order("dev/react") == 0


def test_zero_is_not_a_series_position():
    assert series_order("dev/react_0") == 0


def test_three_or_more_tokens_never_form_a_series():
    assert series_order("a_b_3") == 0
    assert series_order("a_b_c_2") == 0
    assert series_key("a_b_c_2") is None


def test_non_ascii_digits_are_rejected():
    assert series_order("dev/post_²") == 0


def test_series_key_is_first_segment():
    assert series_key("dev/2019/react-hooks_1") == "dev/2019/react-hooks"
    assert series_key("dev/2019/plain") is None


def test_groups_and_orders_series_members():
    entries = [
        ("dev/react-hooks_7", "Hooks 7"),
        ("dev/vue_1", "Vue 1"),
        ("dev/react-hooks_3", "Hooks 3"),
        ("dev/plain-post", "Plain"),
    ]
    groups = detect_series(entries)

    assert set(groups) == {"dev/react-hooks", "dev/vue"}
    assert [e.slug for e in groups["dev/react-hooks"]] == [
        "dev/react-hooks_3",
        "dev/react-hooks_7",
    ]
    assert [e.order for e in groups["dev/react-hooks"]] == [3, 7]
    assert groups["dev/react-hooks"][0].title == "Hooks 3"


def test_deep_names_are_excluded_from_matching_series():
    entries = [
        ("dev/tutorial_1", "One"),
        ("dev/tutorial_2", "Two"),
        ("dev/tutorial_extra_3", "Deep"),
    ]
    groups = detect_series(entries)
    assert [e.slug for e in groups["dev/tutorial"]] == ["dev/tutorial_1", "dev/tutorial_2"]


def test_equal_orders_keep_discovery_order():
    entries = [("dev/a_1", "first"), ("dev/a_01", "second")]
    groups = detect_series(entries)
    assert [e.title for e in groups["dev/a"]] == ["first", "second"]


def test_empty_input():
    assert detect_series([]) == {}


def test_slug_without_underscore_is_never_a_series():
    # The digits-only last token still parses, but one token is not a series
    assert series_order("2018/08/24") == 20180824
    assert not is_series_member("2018/08/24")
    assert series_key("2018/08/24") is None
    assert detect_series([("2018/08/24", "Day post")]) == {}


def test_dated_slug_next_to_real_series():
    entries = [("2018/08/24", "Day post"), ("2018/08/trip_1", "Trip 1")]
    groups = detect_series(entries)
    assert list(groups) == ["2018/08/trip"]
