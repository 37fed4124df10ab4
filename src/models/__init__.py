from sqlmodel import SQLModel
from .user import User
from .book import Book
from .reading_session import ReadingSession
from .user_book_reward import UserBookReward
from .review import Review
from .transaction import Transaction
from .withdrawal import Withdrawal
