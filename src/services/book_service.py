import logging
from typing import Dict, List, Optional
import uuid

from sqlalchemy import func, update
from sqlmodel import Session, select

from core import constants
from core.exceptions import ForbiddenError, NotFoundError
from models.book import Book
from models.review import Review
from models.user import User
from models.user_book_reward import UserBookReward
from schemas import (
    BookContent,
    BookCreateRequest,
    BookDetail,
    BookListData,
    BookUpdateRequest,
    PublicBook,
    PublicReview,
    ReviewAuthor,
)
from utils.extension_utils import minutes_ceil, round_half_up, to_iso, utcnow

logger = logging.getLogger(__name__)


def difficulty_for_level(required_level: int) -> str:
    return constants.DIFFICULTY_BY_LEVEL.get(required_level, constants.DIFFICULTY_HARD)


def to_public_book(book: Book, user_level: int = 0, has_reward: bool = False) -> PublicBook:
    return PublicBook(
        id=book.id,
        title=book.title,
        author=book.author,
        genre=book.genre,
        synopsis=book.synopsis,
        cover_image=book.cover_image,
        reward_money=book.base_reward_money,
        reward_points=book.reward_points,
        reviews_count=book.reviews_count,
        average_rating=book.average_rating,
        estimated_read_time=minutes_ceil(book.estimated_read_time),
        difficulty=difficulty_for_level(book.required_level),
        is_available=book.required_level <= user_level,
        required_level=book.required_level,
        has_received_reward=has_reward,
        created_at=to_iso(book.created_at),
    )


class BookService:
    def __init__(self, session: Session):
        self.session = session

    def _rewarded_book_ids(self, user_id: uuid.UUID) -> Dict[uuid.UUID, bool]:
        rewards = self.session.exec(
            select(UserBookReward).where(UserBookReward.user_id == user_id)
        ).all()
        return {reward.book_id: reward.has_received_reward for reward in rewards}

    def list_books(self, user: Optional[User] = None) -> BookListData:
        user_level = user.level if user else 0
        rewarded = self._rewarded_book_ids(user.id) if user else {}

        books = self.session.exec(
            select(Book)
            .where(Book.active == True)
            .order_by(Book.required_level.asc(), Book.created_at.asc())
        ).all()

        public_books = [
            to_public_book(book, user_level, rewarded.get(book.id, False))
            for book in books
        ]
        return BookListData(
            available=[book for book in public_books if book.is_available],
            locked=[book for book in public_books if not book.is_available],
            user_level=user_level,
            total_books=len(books),
        )

    def get_book(self, book_id: uuid.UUID, user: Optional[User] = None) -> BookDetail:
        book = self.session.get(Book, book_id)
        if not book:
            raise NotFoundError(constants.MSG_BOOK_NOT_FOUND)
        if not book.active:
            raise NotFoundError(constants.MSG_BOOK_UNAVAILABLE)

        user_level = 0
        has_reward = False
        can_read = True
        if user:
            user_level = user.level
            has_reward = self._rewarded_book_ids(user.id).get(book.id, False)
            can_read = book.required_level <= user_level

        statement = (
            select(Review, User)
            .join(User, User.id == Review.user_id)
            .where(Review.book_id == book.id)
            .order_by(Review.created_at.desc())
            .limit(constants.LATEST_REVIEWS_LIMIT)
        )
        reviews = [
            PublicReview(
                id=review.id,
                rating=review.rating,
                comment=review.comment,
                created_at=to_iso(review.created_at),
                user=ReviewAuthor(name=author.name, level=author.level),
            )
            for review, author in self.session.exec(statement).all()
        ]

        public_book = to_public_book(book, user_level, has_reward)
        return BookDetail(**public_book.model_dump(), can_read=can_read, reviews=reviews)

    def get_book_content(self, book_id: uuid.UUID, user: User) -> BookContent:
        book = self.session.exec(
            select(Book).where(Book.id == book_id).where(Book.active == True)
        ).first()
        if not book:
            raise NotFoundError(constants.MSG_BOOK_NOT_FOUND)

        if user.level < book.required_level:
            raise ForbiddenError(constants.MSG_INSUFFICIENT_LEVEL)

        return BookContent(
            id=book.id,
            title=book.title,
            content=book.content,
            word_count=book.word_count,
            estimated_read_time=book.estimated_read_time,
        )

    def apply_new_rating(self, book: Book, rating: int) -> Book:
        """Fold one new review into the book aggregates.

        Count and sum move with atomic increments; the average is derived
        from the incremented row, which this transaction now holds locked.
        """
        self.session.exec(
            update(Book)
            .where(Book.id == book.id)
            .values(
                reviews_count=Book.reviews_count + 1,
                ratings_sum=Book.ratings_sum + rating,
                updated_at=utcnow(),
            )
            .execution_options(synchronize_session=False)
        )
        self.session.refresh(book)
        book.average_rating = round_half_up(book.ratings_sum / book.reviews_count, 1)
        self.session.add(book)
        self.session.flush()
        return book

    def recalculate_stats(self, book_id: uuid.UUID) -> Book:
        book = self.session.get(Book, book_id)
        if not book:
            raise NotFoundError(constants.MSG_BOOK_NOT_FOUND)

        count, total = self.session.exec(
            select(func.count(Review.id), func.coalesce(func.sum(Review.rating), 0))
            .where(Review.book_id == book_id)
        ).one()

        book.reviews_count = count
        book.ratings_sum = total
        book.average_rating = round_half_up(total / count, 1) if count else 0.0
        book.updated_at = utcnow()
        self.session.add(book)
        self.session.commit()
        self.session.refresh(book)
        return book

    def list_all_book_ids(self) -> List[uuid.UUID]:
        return list(self.session.exec(select(Book.id)).all())

    def create_book(self, payload: BookCreateRequest) -> Book:
        data = payload.model_dump()
        if data["word_count"] is None:
            data["word_count"] = len(payload.content.split())
        if data["estimated_read_time"] is None:
            data["estimated_read_time"] = int(
                data["word_count"] / constants.AVERAGE_READING_SPEED * 60
            )

        book = Book(**data)
        self.session.add(book)
        self.session.commit()
        self.session.refresh(book)
        logger.info(f"Book created: {book.title} ({book.id})")
        return book

    def update_book(self, book_id: uuid.UUID, payload: BookUpdateRequest) -> Book:
        book = self.session.get(Book, book_id)
        if not book:
            raise NotFoundError(constants.MSG_BOOK_NOT_FOUND)

        for key, value in payload.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(book, key, value)
        book.updated_at = utcnow()

        self.session.add(book)
        self.session.commit()
        self.session.refresh(book)
        logger.info(f"Book updated: {book.title} ({book.id})")
        return book
