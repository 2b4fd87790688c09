"""Tests for the recommendation feed."""

from __future__ import annotations

from dataclasses import replace
from datetime import timedelta
from pathlib import Path

import pytest

from collab_engine.application.recommendations import (
    EXPORT_COLUMNS,
    export_ranked_postings,
    load_recommendations,
)
from collab_engine.config import EngineConfig
from collab_engine.domain.models import CollabCardData, RankedCollabPosting, RankingBreakdown
from collab_engine.domain.ranking_weights import RankingWeights
from collab_engine.exceptions import DataAccessError
from tests.fakes import InMemoryDataStore, InMemoryFileSystem
from tests.support.builders import NOW, make_posting, make_user


def _store() -> InMemoryDataStore:
    viewer = make_user("viewer", niche_tags=("fitness", "travel"), follower_bucket="10k-50k")
    match = make_user(
        "match",
        niche_tags=("Fitness", "Food"),
        follower_bucket="10k-50k",
        completed_collabs_count=12,
        reliability_score=80,
    )
    other = make_user("other", niche_tags=("gaming",), follower_bucket="0-1k")
    return InMemoryDataStore(
        profiles={"viewer": viewer, "match": match, "other": other},
        postings=[
            make_posting("old-match", "match", age=timedelta(days=3), title="Old"),
            make_posting("fresh-other", "other", age=timedelta(minutes=10), title="Fresh"),
            make_posting("best", "match", age=timedelta(hours=2), title="Best"),
            make_posting("mine", "viewer", age=timedelta(minutes=1)),
            make_posting("done", "match", status="completed"),
            make_posting("orphan", "ghost", age=timedelta(hours=5)),
        ],
    )


def test_feed_ranks_pending_collabs_of_other_creators() -> None:
    store = _store()

    feed = load_recommendations("viewer", store=store, config=EngineConfig(), now=NOW)

    assert feed.viewer is not None
    assert [item.posting.id for item in feed.recommended] == [
        "best",
        "old-match",
        "fresh-other",
        "orphan",
    ]
    assert feed.recommended[0].match_score == 80
    assert feed.recommended[-1].match_score == 0


def test_latest_feed_is_newest_first() -> None:
    feed = load_recommendations("viewer", store=_store(), config=EngineConfig(), now=NOW)

    assert [posting.id for posting in feed.latest] == [
        "fresh-other",
        "best",
        "orphan",
        "old-match",
    ]


def test_feed_is_truncated_to_recommendation_limit() -> None:
    config = EngineConfig(recommendation_limit=2)

    feed = load_recommendations("viewer", store=_store(), config=config, now=NOW)

    assert [item.posting.id for item in feed.recommended] == ["best", "old-match"]
    assert [posting.id for posting in feed.latest] == ["fresh-other", "best"]


def test_candidate_limit_is_passed_to_store() -> None:
    store = _store()

    load_recommendations("viewer", store=store, config=EngineConfig(candidate_limit=3), now=NOW)

    assert store.pending_limits == [3]


def test_creators_are_fetched_in_one_batch() -> None:
    store = _store()

    load_recommendations("viewer", store=store, config=EngineConfig(), now=NOW)

    assert store.calls.count("fetch_profiles_by_ids") == 1


def test_missing_viewer_returns_empty_feed() -> None:
    store = _store()

    feed = load_recommendations("nobody", store=store, config=EngineConfig(), now=NOW)

    assert feed.viewer is None
    assert feed.is_empty
    assert "fetch_pending_collabs" not in store.calls


def test_no_pending_collabs_returns_empty_feed() -> None:
    store = InMemoryDataStore(profiles={"viewer": make_user("viewer")})

    feed = load_recommendations("viewer", store=store, config=EngineConfig(), now=NOW)

    assert feed.viewer == make_user("viewer")
    assert feed.is_empty


def test_custom_weights_change_scores() -> None:
    weights = RankingWeights(tag_overlap=0, follower_tier=0, recent_activity=100, reliability=0)

    feed = load_recommendations(
        "viewer", store=_store(), config=EngineConfig(), now=NOW, weights=weights
    )

    assert feed.recommended[0].posting.id == "best"
    assert feed.recommended[0].match_score == 100


def test_data_access_error_propagates() -> None:
    store = _store()
    store.failing.add("fetch_pending_collabs")

    with pytest.raises(DataAccessError):
        load_recommendations("viewer", store=store, config=EngineConfig(), now=NOW)


def test_export_writes_one_row_per_ranked_posting(in_memory_fs: InMemoryFileSystem) -> None:
    feed = load_recommendations("viewer", store=_store(), config=EngineConfig(), now=NOW)
    path = Path("out/ranked.csv")

    written = export_ranked_postings(feed.recommended, path, in_memory_fs)

    assert written == path
    frame = in_memory_fs.read_csv(path)
    assert list(frame.columns) == list(EXPORT_COLUMNS)
    assert frame["collab_id"].tolist() == ["best", "old-match", "fresh-other", "orphan"]
    first = frame.iloc[0]
    assert first["match_score"] == 80
    assert first["title"] == "Best"
    assert first["explanation"] == (
        "Tags: 22pts • Follower tier: 30pts • Activity: 20pts • Reliability: 8pts"
    )
    assert frame.iloc[-1]["explanation"] == "No match"


def test_export_includes_card_details(in_memory_fs: InMemoryFileSystem) -> None:
    posting = replace(
        make_posting("c1", "match", title="Summer shoot"),
        card_data=CollabCardData(
            title="Summer shoot",
            objective="Grow both audiences",
            collab_type="content",
            who_posts="both",
            deadline="2025-07-01",
            deliverables=("3 reels", "1 story"),
            required_skills=("editing",),
            tags=("travel", "food"),
        ),
    )
    ranked = [RankedCollabPosting(posting=posting, breakdown=RankingBreakdown(tag_overlap=10))]

    export_ranked_postings(ranked, Path("out/details.csv"), in_memory_fs)

    row = in_memory_fs.read_csv(Path("out/details.csv")).iloc[0]
    assert row["objective"] == "Grow both audiences"
    assert row["collab_type"] == "content"
    assert row["who_posts"] == "both"
    assert row["deadline"] == "2025-07-01"
    assert row["deliverables"] == "3 reels; 1 story"
    assert row["required_skills"] == "editing"
    assert row["tags"] == "travel; food"
    assert row["description"] == ""
