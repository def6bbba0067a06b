"""Tests for ContentIndex construction and queries."""

import dataclasses
from datetime import datetime

import pytest

from postgraph.errors import DuplicateSlugError
from postgraph.models.post import Post
from postgraph.services.content_index import ContentIndex, build_content_index
from postgraph.services.ingestion.normalizer import coerce_tags


def _make_post(slug, date, tags=None, category=None, source_path=None):
    return Post(
        slug=slug,
        source_path=source_path or f"{slug}.md",
        title=slug.rsplit("/", 1)[-1],
        date=date,
        tags=coerce_tags(tags),
        category=category,
    )


def _corpus():
    return [
        _make_post("dev/react_1", datetime(2019, 1, 1), ["react", "js"], "dev"),
        _make_post("dev/react_2", datetime(2019, 2, 1), ["react"], "dev"),
        _make_post("life/diary", datetime(2020, 5, 5), None, "life"),
        _make_post("bicycle/ride", datetime(2018, 8, 24), "bicycle", "bicycle"),
    ]


def test_posts_sorted_newest_first():
    index = build_content_index(_corpus())
    assert [p.slug for p in index.get_all_posts()] == [
        "life/diary",
        "dev/react_2",
        "dev/react_1",
        "bicycle/ride",
    ]


def test_equal_dates_keep_scan_order():
    same_day = datetime(2021, 3, 3)
    posts = [
        _make_post("b", same_day),
        _make_post("a", same_day),
        _make_post("c", datetime(2022, 1, 1)),
        _make_post("d", same_day),
    ]
    index = build_content_index(posts)
    assert [p.slug for p in index.get_all_posts()] == ["c", "b", "a", "d"]


def test_tag_groups():
    index = build_content_index(_corpus())
    groups = index.get_tag_groups()

    assert groups["react"].total_count == 2
    assert [p.slug for p in groups["react"].posts] == ["dev/react_2", "dev/react_1"]
    assert groups["js"].total_count == 1
    assert groups["bicycle"].total_count == 1


def test_untagged_posts_only_in_undefined_group():
    index = build_content_index(_corpus())
    groups = index.get_tag_groups()

    assert [p.slug for p in groups["undefined"].posts] == ["life/diary"]
    others = [g for name, g in groups.items() if name != "undefined"]
    assert all("life/diary" not in [p.slug for p in g.posts] for g in others)


def test_group_posts_are_index_posts():
    index = build_content_index(_corpus())
    by_tag = index.get_posts_by_tag("react")
    assert by_tag[0] is index.get_post_by_slug("dev/react_2")


def test_repeated_tag_counts_once():
    index = build_content_index([_make_post("x", datetime(2020, 1, 1), ["a", "a"])])
    assert index.get_tag_groups()["a"].total_count == 1


def test_get_all_tags_hides_sentinel_by_default():
    index = build_content_index(_corpus())
    assert index.get_all_tags() == ["bicycle", "js", "react"]
    assert index.get_all_tags(include_sentinel=True) == ["bicycle", "js", "react", "undefined"]


def test_unknown_tag_is_empty():
    index = build_content_index(_corpus())
    assert index.get_posts_by_tag("cooking") == []


def test_lookup_by_slug():
    index = build_content_index(_corpus())
    assert index.get_post_by_slug("dev/react_1").title == "react_1"
    assert index.get_post_by_slug("/dev/react_1/").slug == "dev/react_1"
    assert index.get_post_by_slug("dev/missing") is None


def test_categories():
    index = build_content_index(_corpus())
    assert index.get_all_categories() == ["bicycle", "dev", "life"]
    assert [p.slug for p in index.get_posts_by_category("dev")] == [
        "dev/react_2",
        "dev/react_1",
    ]


def test_series_lookup():
    index = build_content_index(_corpus())
    series = index.get_series("dev/react_2")
    assert [(e.slug, e.order) for e in series] == [("dev/react_1", 1), ("dev/react_2", 2)]
    assert index.get_series("life/diary") == []


def test_duplicate_slug_names_both_files():
    posts = [
        _make_post("dev/post", datetime(2020, 1, 1), source_path="dev/post.md"),
        _make_post("dev/post", datetime(2021, 1, 1), source_path="dev/Post.md"),
    ]
    with pytest.raises(DuplicateSlugError) as exc_info:
        build_content_index(posts)
    assert exc_info.value.paths == ["dev/post.md", "dev/Post.md"]
    assert "dev/post.md" in str(exc_info.value)
    assert "dev/Post.md" in str(exc_info.value)


def test_empty_corpus():
    index = build_content_index([])
    assert index.get_all_posts() == []
    assert index.get_all_tags() == []
    assert len(index) == 0


def test_empty_constructor():
    index = ContentIndex.empty()
    assert index.get_all_posts() == []
    assert index.get_post_by_slug("anything") is None


def test_returned_lists_are_copies():
    index = build_content_index(_corpus())
    index.get_all_posts().clear()
    index.get_posts_by_tag("react").clear()
    assert len(index.get_all_posts()) == 4
    assert len(index.get_posts_by_tag("react")) == 2


def test_tag_groups_cannot_change_the_index():
    index = build_content_index(_corpus())
    groups = index.get_tag_groups()

    with pytest.raises(AttributeError):
        groups["react"].posts.clear()
    with pytest.raises(dataclasses.FrozenInstanceError):
        groups["react"].posts = ()
    del groups["react"]

    assert len(index.get_posts_by_tag("react")) == 2
    assert "react" in index.get_tag_groups()


def test_dated_slug_does_not_form_a_series():
    index = build_content_index([_make_post("2018/08/24", datetime(2018, 8, 24))])
    assert index.get_series("2018/08/24") == []
