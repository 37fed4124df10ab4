import logging
import sys
from typing import Optional

import click
from sqlmodel import Session

from core.db import engine
from log import setup_logging_to_console, setup_logging_to_file
from services.book_service import BookService
from utils.api import parse_uuid

logger = logging.getLogger("recalculate_book_stats")
logger.setLevel(logging.INFO)


def recalculate_book_stats(session: Session, book_id: Optional[str] = None) -> int:
    """Rebuild reviews_count, ratings_sum and average_rating from the reviews table."""
    service = BookService(session)
    if book_id:
        parsed_id = parse_uuid(book_id)
        if not parsed_id:
            raise click.BadParameter(f"invalid book id {book_id}")
        book_ids = [parsed_id]
    else:
        book_ids = service.list_all_book_ids()

    logger.info(f"Recalculating stats for {len(book_ids)} book(s)")
    for book_id in book_ids:
        book = service.recalculate_stats(book_id)
        logger.info(
            f"Book {book.title}: reviews_count={book.reviews_count} "
            f"average_rating={book.average_rating}"
        )
    return len(book_ids)


@click.command()
@click.option(
    "--book-id",
    type=str,
    default=None,
    help="Only recalculate this book; all books when omitted",
)
def main(book_id: Optional[str] = None):
    with Session(engine) as session:
        recalculate_book_stats(session, book_id)
    sys.exit(0)


if __name__ == "__main__":
    setup_logging_to_console()
    setup_logging_to_file(app="recalculate_book_stats", level=logging.INFO, logger=logger)

    main()
