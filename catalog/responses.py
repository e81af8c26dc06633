""" Contains the response sink that page handlers write their result to """
from flask import Response, jsonify

class ResponseSink:
    """
    Collects the status code and body written by a page handler
    so the view can turn them into a Flask response.
    """

    def __init__(self):
        self.status_code = 200
        self.body = None

    def status(self, code: int):
        """Set the status code. Returns the sink so send() can be chained."""
        self.status_code = code
        return self

    def send(self, body):
        """Set the response body."""
        self.body = body
        return self

    def to_response(self):
        """
        Build the Flask response:
        dictionaries and lists are sent as JSON, anything else as plain text.
        """
        if isinstance(self.body, (dict, list)):
            return jsonify(self.body), self.status_code
        body = "" if self.body is None else str(self.body)
        return Response(body, status=self.status_code, mimetype="text/plain")
