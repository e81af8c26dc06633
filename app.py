"""Flask application module for showing the details of a book in the catalog."""
# pylint: disable=cyclic-import
import atexit
import logging
import os
import sys
import traceback
from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException
from catalog.book_details import show_book_details
from catalog.responses import ResponseSink
from database.mongo_helper import close_clients

app = Flask(__name__)

# Use app.config to set config connection details
load_dotenv()
app.config['MONGO_URI'] = os.getenv('MONGO_CONNECTION', 'mongodb://localhost:27017/')
app.config['DB_NAME'] = os.getenv('PROJECT_DATABASE', 'library')
app.config['COLLECTION_NAME'] = os.getenv('PROJECT_COLLECTION', 'books')
app.config['AUTHORS_COLLECTION_NAME'] = os.getenv('AUTHORS_COLLECTION', 'authors')
app.config['INSTANCES_COLLECTION_NAME'] = os.getenv('INSTANCES_COLLECTION', 'bookinstances')
app.config['SECRET_KEY'] = os.getenv('SECRET_KEY')

def get_log_level(level_name):
    """Return the logging level for a name such as 'debug', or INFO if it is not a known level."""
    level = logging.getLevelName(str(level_name).upper())
    if isinstance(level, int):
        return level
    return logging.INFO

logging.basicConfig(level=get_log_level(os.getenv('LOG_LEVEL', 'INFO')))

# The shared MongoClient is closed when the process exits
atexit.register(close_clients)

# ----------- GET section ------------------
@app.route("/books/<string:book_id>", methods=["GET"])
@app.route("/books/<string:book_id>/details", methods=["GET"])
def get_book_details(book_id):
    """
    Retrieve a book by its ID together with its author's name
    and the imprint and status of each of its copies.
    """
    res = ResponseSink()
    show_book_details(res, book_id)
    return res.to_response()

@app.errorhandler(HTTPException)
def handle_http_exception(e):
    """
    Return JSON instead of HTML for HTTP errors.
    This handler preserves the original status code of the exception.
    """
    response = {
        "code": e.code,
        "name": e.name,
        "description": e.description,
    }
    return jsonify(response), e.code


@app.errorhandler(Exception)
def handle_exception(e): # pylint: disable=unused-argument
    """
    Catches unhandled exceptions, prints the traceback to stderr,
    and returns a generic 500 JSON response.
    """
    traceback.print_exc(file=sys.stderr)

    # Return a generic, user-friendly error message
    return jsonify({"error": "An internal server error occurred."}), 500
