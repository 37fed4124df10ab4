from unittest.mock import patch

import click
import pytest

from bg_tasks.recalculate_book_stats import recalculate_book_stats
from models import Review


def add_review(db_session, user, book, rating):
    db_session.add(Review(user_id=user.id, book_id=book.id, rating=rating))
    db_session.commit()


@patch("bg_tasks.recalculate_book_stats.logger")
def test_recalculate_all_books(mock_logger, db_session, make_user, make_book):
    user = make_user()
    first = make_book(title="Primeiro")
    second = make_book(title="Segundo", reviews_count=7, ratings_sum=30, average_rating=4.3)
    for rating in (5, 4, 3):
        add_review(db_session, user, first, rating)

    count = recalculate_book_stats(db_session)

    assert count == 2
    db_session.refresh(first)
    db_session.refresh(second)
    assert (first.reviews_count, first.ratings_sum, first.average_rating) == (3, 12, 4.0)
    assert (second.reviews_count, second.ratings_sum, second.average_rating) == (0, 0, 0.0)
    mock_logger.info.assert_any_call("Recalculating stats for 2 book(s)")


@patch("bg_tasks.recalculate_book_stats.logger")
def test_recalculate_single_book(mock_logger, db_session, make_user, make_book):
    user = make_user()
    book = make_book()
    add_review(db_session, user, book, 5)
    add_review(db_session, user, book, 4)

    assert recalculate_book_stats(db_session, str(book.id)) == 1

    db_session.refresh(book)
    # 4.5 is kept as is, rounding only applies past the first decimal
    assert book.average_rating == 4.5
    assert book.reviews_count == 2


def test_recalculate_invalid_book_id(db_session):
    with pytest.raises(click.BadParameter):
        recalculate_book_stats(db_session, "not-a-uuid")
