"""Module containing pymongo helper functions for the book catalog."""
from bson.objectid import ObjectId
from pymongo import MongoClient
from pymongo.errors import ConnectionFailure

def _to_object_id(value):
    """
    Convert a string ID to a BSON ObjectId when it is a valid one,
    otherwise return the value unchanged.
    """
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return value

def _prepare_filter(query_filter: dict):
    """Return a copy of the filter with its reference fields converted to ObjectIds."""
    prepared = dict(query_filter)
    for key in ('_id', 'book'):
        if key in prepared:
            prepared[key] = _to_object_id(prepared[key])
    return prepared

# One client per connection URI, shared by every request in the process
_clients = {}

def get_client():
    """
    Return the MongoClient for the configured URI, creating it on first use
    """
    from app import app # pylint: disable=import-outside-toplevel,cyclic-import
    uri = app.config['MONGO_URI']
    if uri not in _clients:
        try:
            _clients[uri] = MongoClient(uri, serverSelectionTimeoutMS=5000)
        except ConnectionFailure as e:
            # Handle the connection error and return error information
            raise ConnectionFailure(f'Could not connect to MongoDB: {str(e)}') from e
    return _clients[uri]

def close_clients():
    """Close every cached client."""
    while _clients:
        _uri, client = _clients.popitem()
        client.close()

def get_database():
    """Return the configured database from the shared client."""
    from app import app # pylint: disable=import-outside-toplevel,cyclic-import
    return get_client()[app.config['DB_NAME']]

def get_collection(collection_name: str):
    """
    Return the named collection of the configured database
    """
    return get_database()[collection_name]

def get_books_collection():
    """Return the books collection."""
    from app import app # pylint: disable=import-outside-toplevel,cyclic-import
    return get_collection(app.config['COLLECTION_NAME'])

def get_authors_collection():
    """Return the authors collection."""
    from app import app # pylint: disable=import-outside-toplevel,cyclic-import
    return get_collection(app.config['AUTHORS_COLLECTION_NAME'])

def get_instances_collection():
    """Return the book instances (copies) collection."""
    from app import app # pylint: disable=import-outside-toplevel,cyclic-import
    return get_collection(app.config['INSTANCES_COLLECTION_NAME'])

def find_one_book(query_filter: dict, books_collection, authors_collection=None):
    """
    Returns the book matching query_filter from the MongoDB collection,
    or None if there is no match.
    When an authors collection is given, the book's author reference
    is replaced with the matching author document.
    """
    book = books_collection.find_one(_prepare_filter(query_filter))
    if not book:
        return None

    # Stringify the BSON _id so the book can be JSON serialized
    book['_id'] = str(book['_id'])

    if authors_collection is not None and book.get('author') is not None:
        author = authors_collection.find_one({'_id': _to_object_id(book['author'])})
        if author:
            author['_id'] = str(author['_id'])
        book['author'] = author

    return book

def find_book_instances(query_filter: dict, instances_collection, fields):
    """
    Returns a list of the book instances matching query_filter,
    with each document projected down to the given fields.
    """
    # Only return the requested fields, never mongoDB's _id
    projection = {field: 1 for field in fields}
    projection['_id'] = 0

    instances_cursor = instances_collection.find(_prepare_filter(query_filter), projection)

    # Use list() to iterate through the collection using the Cursor
    return list(instances_cursor)
