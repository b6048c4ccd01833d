import logging

import pytest
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from gamestore_api.models.game import Game
from gamestore_api.models.rating import Rating
from gamestore_api.models.review import Review
from gamestore_api.utils import rating as rating_utils
from gamestore_api.utils.rating import (
    get_rating,
    recompute_rating,
    recompute_all_ratings,
    refresh_game_rating,
)


def add_game(db, title="Aggregated"):
    game = Game(title=title, description="for rating tests")
    db.add(game)
    db.commit()
    return game


def add_review(db, game, rating, approved=True):
    review = Review(game_id=game.id, user_name="tester", rating=rating, review_text="...", approved=approved)
    db.add(review)
    db.commit()
    return review


def test_all_approved_reviews_are_averaged(db):
    game = add_game(db)
    for value in (5, 4, 3):
        add_review(db, game, value)

    rating = recompute_rating(db, game.id)

    assert rating.average_rating == pytest.approx(4.0)
    assert rating.total_ratings == 3


def test_unapproved_reviews_are_excluded(db):
    game = add_game(db)
    add_review(db, game, 4)
    add_review(db, game, 1, approved=False)

    rating = recompute_rating(db, game.id)

    assert rating.average_rating == pytest.approx(4.0)
    assert rating.total_ratings == 1


def test_average_is_not_rounded(db):
    game = add_game(db)
    for value in (5, 4, 4):
        add_review(db, game, value)

    rating = recompute_rating(db, game.id)

    assert rating.average_rating == pytest.approx(13 / 3)


def test_removing_last_approved_review_clears_rating(db):
    game = add_game(db)
    review = add_review(db, game, 5)
    assert recompute_rating(db, game.id) is not None

    db.delete(review)
    db.commit()

    assert recompute_rating(db, game.id) is None
    assert get_rating(db, game.id) is None
    assert db.query(Rating).filter_by(game_id=game.id).count() == 0


def test_approving_first_review_creates_rating(db):
    game = add_game(db)
    review = add_review(db, game, 2, approved=False)
    assert recompute_rating(db, game.id) is None

    review.approved = True
    db.commit()

    rating = recompute_rating(db, game.id)
    assert rating.average_rating == pytest.approx(2.0)
    assert rating.total_ratings == 1


def test_game_without_reviews_has_no_rating(db):
    game = add_game(db)
    assert recompute_rating(db, game.id) is None
    assert get_rating(db, game.id) is None


def test_recompute_is_idempotent(db):
    game = add_game(db)
    for value in (1, 2, 5):
        add_review(db, game, value)

    first = recompute_rating(db, game.id)
    first_values = (first.average_rating, first.total_ratings)
    second = recompute_rating(db, game.id)

    assert (second.average_rating, second.total_ratings) == first_values
    assert db.query(Rating).filter_by(game_id=game.id).count() == 1


def test_upsert_updates_existing_row(db):
    game = add_game(db)
    add_review(db, game, 1)
    first = recompute_rating(db, game.id)
    first_id = first.id

    add_review(db, game, 5)
    second = recompute_rating(db, game.id)

    assert second.id == first_id
    assert second.average_rating == pytest.approx(3.0)
    assert second.total_ratings == 2


def test_loaded_game_sees_new_rating(db):
    game = add_game(db)
    assert game.rating is None

    add_review(db, game, 4)
    recompute_rating(db, game.id)

    assert game.average_rating == pytest.approx(4.0)
    assert game.total_ratings == 1


def test_ratings_are_per_game(db):
    first = add_game(db, "First")
    second = add_game(db, "Second")
    add_review(db, first, 5)
    add_review(db, second, 1)

    recompute_rating(db, first.id)
    recompute_rating(db, second.id)

    assert get_rating(db, first.id).average_rating == pytest.approx(5.0)
    assert get_rating(db, second.id).average_rating == pytest.approx(1.0)


def test_refresh_swallows_database_errors(db, monkeypatch, caplog):
    game = add_game(db)

    def boom(session, game_id):
        raise OperationalError("SELECT 1", {}, Exception("database is gone"))

    monkeypatch.setattr(rating_utils, "recompute_rating", boom)

    with caplog.at_level(logging.WARNING, logger="gamestore_api.utils.rating"):
        assert refresh_game_rating(db, game.id) is False

    assert any("may be stale" in r.getMessage() for r in caplog.records)


def test_refresh_reports_success(db):
    game = add_game(db)
    add_review(db, game, 3)
    assert refresh_game_rating(db, game.id) is True
    assert get_rating(db, game.id).total_ratings == 1


def test_recompute_all_ratings(db):
    rated = add_game(db, "Rated")
    unrated = add_game(db, "Unrated")
    add_review(db, rated, 4)
    add_review(db, unrated, 2, approved=False)

    summary = recompute_all_ratings(db)

    assert summary == {"updated": 1, "cleared": 1, "errors": 0}
    assert get_rating(db, rated.id).average_rating == pytest.approx(4.0)
    assert get_rating(db, unrated.id) is None


def test_recompute_all_counts_failures(db, monkeypatch):
    add_game(db, "One")
    add_game(db, "Two")

    def boom(session, game_id):
        raise SQLAlchemyError("write failed")

    monkeypatch.setattr(rating_utils, "recompute_rating", boom)

    assert recompute_all_ratings(db) == {"updated": 0, "cleared": 0, "errors": 2}
