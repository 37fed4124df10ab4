from typing import List, Optional
import uuid

from pydantic import Field

from schemas.base import CamelModel


class PublicBook(CamelModel):
    id: uuid.UUID
    title: str
    author: str
    genre: str
    synopsis: str
    cover_image: Optional[str] = None
    reward_money: int
    reward_points: int
    reviews_count: int
    average_rating: float
    # minutes
    estimated_read_time: int
    difficulty: str
    is_available: bool
    required_level: int
    has_received_reward: bool
    created_at: str


class ReviewAuthor(CamelModel):
    name: str
    level: int


class PublicReview(CamelModel):
    id: uuid.UUID
    rating: int
    comment: Optional[str] = None
    created_at: str
    user: ReviewAuthor


class BookDetail(PublicBook):
    can_read: bool
    reviews: List[PublicReview] = []


class BookListData(CamelModel):
    available: List[PublicBook]
    locked: List[PublicBook]
    user_level: int
    total_books: int


class BookDetailData(CamelModel):
    book: BookDetail


class BookContent(CamelModel):
    id: uuid.UUID
    title: str
    content: str
    word_count: int
    # seconds
    estimated_read_time: int


class BookCreateRequest(CamelModel):
    title: str = Field(min_length=1)
    author: str = Field(min_length=1)
    genre: str
    synopsis: str
    content: str = Field(min_length=1)
    cover_image: Optional[str] = None
    base_reward_money: int = Field(default=0, ge=0)
    reward_points: int = Field(default=0, ge=0)
    premium_multiplier: float = Field(default=3.0, ge=1)
    word_count: Optional[int] = Field(default=None, ge=0)
    page_count: int = Field(default=0, ge=0)
    estimated_read_time: Optional[int] = Field(default=None, ge=0)
    required_level: int = Field(default=0, ge=0)
    is_initial_book: bool = False
    active: bool = True


class BookUpdateRequest(CamelModel):
    title: Optional[str] = None
    author: Optional[str] = None
    genre: Optional[str] = None
    synopsis: Optional[str] = None
    content: Optional[str] = None
    cover_image: Optional[str] = None
    base_reward_money: Optional[int] = Field(default=None, ge=0)
    reward_points: Optional[int] = Field(default=None, ge=0)
    premium_multiplier: Optional[float] = Field(default=None, ge=1)
    word_count: Optional[int] = Field(default=None, ge=0)
    page_count: Optional[int] = Field(default=None, ge=0)
    estimated_read_time: Optional[int] = Field(default=None, ge=0)
    required_level: Optional[int] = Field(default=None, ge=0)
    is_initial_book: Optional[bool] = None
    active: Optional[bool] = None


class AdminBook(CamelModel):
    id: uuid.UUID
    title: str
    author: str
    genre: str
    base_reward_money: int
    reward_points: int
    premium_multiplier: float
    word_count: int
    required_level: int
    is_initial_book: bool
    active: bool
    reviews_count: int
    average_rating: float
