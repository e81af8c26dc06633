"""
This module handles the book details page: the book's title,
its author and the status of each of its copies.
"""
import logging
from database import mongo_helper

# The only instance fields shown on the details page
INSTANCE_FIELDS = ('imprint', 'status')

def show_book_details(res, book_id):
    """
    Look up a book and its copies and send them to the response sink.

    Sends 404 when the ID is not a string or the details are missing,
    and 500 when either database lookup fails.
    """
    if not isinstance(book_id, str):
        logging.warning("Book details requested with a non string id: %s", book_id)
        res.status(404).send(f"Book {book_id} not found")
        return

    try:
        logging.info("Fetching details for book %s", book_id)
        book = mongo_helper.find_one_book(
            {'_id': book_id},
            mongo_helper.get_books_collection(),
            authors_collection=mongo_helper.get_authors_collection()
        )
        copies = mongo_helper.find_book_instances(
            {'book': book_id},
            mongo_helper.get_instances_collection(),
            INSTANCE_FIELDS
        )

        if copies is None or book is None:
            logging.warning("Book details not found for book %s", book_id)
            res.status(404).send(f"Book details not found for book {book_id}")
            return

        # A book whose author could not be populated fails here, before anything is sent
        details = {
            'title': book['title'],
            'author': book['author']['name'],
            'copies': copies
        }
    except Exception as e: # pylint: disable=broad-exception-caught
        logging.error("Error fetching book %s: %s", book_id, e)
        res.status(500).send(f"Error fetching book {book_id}")
        return

    res.send(details)
