# -*- coding: utf-8 -*-
"""This module defines all errors which can occur in the network module.

requests exceptions can be converted to kurve.network errors using the
``handler`` decorator.

All errors share the fields of the Graph error record:
    status (int): HTTP status code, or None.
    status_text (str): HTTP status text, or None.
    text (str): body of the response when it's a text, or None.
    other: any other detail: the OData error object, the binary body, ...
"""

import requests.exceptions


class GraphError(Exception):
    """Base class for kurve.network errors.

    Attributes:
        message (str): Human readable message, describing the error.
        reason (Exception): internal exception which've produced this error.
            Can be None.
    """

    def __init__(self, reason=None, message=None):
        """
        Args:
            reason (Exception, optional): base error
            message (str, optional): User-friendly message.
        """
        self.reason = reason
        self.message = message or "A network error has occurred."
        self.status = None
        self.status_text = None
        self.text = None
        self.other = None
        Exception.__init__(self, self.message)

    def __repr__(self):
        return '%s("%s")' % (self.__class__.__name__, self.message)

    def __str__(self):
        return self.message


class ConnectionError(GraphError):
    def __init__(self, error):
        GraphError.__init__(self, error,
                            "Unable to connect to the Graph servers.")


class TimeoutError(GraphError):
    def __init__(self, error):
        GraphError.__init__(self, error, "The server did not respond on time.")


class HTTPError(GraphError):
    """Base class for HTTP errors.

    The class can be displayed for debug, using ``repr(error)``.

    Attributes:
        request (str): representation of the request.
    """

    def __init__(self, error, message=None):
        """
        Args:
            error (requests.exceptions.HTTPError): base error.
        """
        response = error.response
        if not message:
            message = "The server has returned an HTTP error: %s %s" % (
                response.status_code, response.reason)

        GraphError.__init__(self, error, message)

        self.status = response.status_code
        self.status_text = response.reason
        self.request = '%s %s' % (error.request.method, error.request.url)

        content_type = response.headers.get('Content-Type', '')
        if content_type.startswith('application/json') or \
                content_type.startswith('text/'):
            self.text = response.text
            try:
                self.other = response.json().get('error')
            except (ValueError, AttributeError):
                pass
        else:
            self.other = response.content

    def __repr__(self):
        return '\n'.join(("HTTP Error: %s %s" % (self.status,
                                                 self.status_text),
                          "\tRequest: %s" % self.request,
                          "\tResponse: %s" % (self.text or self.other)))


class HTTPBadRequestError(HTTPError):
    def __init__(self, error):
        HTTPError.__init__(self, error, "The HTTP request is invalid.")


class HTTPUnauthorizedError(HTTPError):
    def __init__(self, error):
        HTTPError.__init__(self, error,
                           "The access token is invalid or has expired.")


class HTTPForbiddenError(HTTPError):
    def __init__(self, error):
        HTTPError.__init__(self, error, "You don't have the permission to do "
                                        "this operation.")


class HTTPNotFoundError(HTTPError):
    def __init__(self, error):
        HTTPError.__init__(self, error, "The element you're looking for has "
                                        "not been found.")


class HTTPInternalServerError(HTTPError):
    def __init__(self, error):
        HTTPError.__init__(self, error, "The Graph servers have encountered "
                                        "an unexpected error.")


class HTTPServiceUnavailableError(HTTPError):
    def __init__(self, error):
        HTTPError.__init__(self, error, "The Graph servers are temporarily "
                                        "unavailable. Please try again later.")


class ODataError(GraphError):
    """The server has returned an OData error object in its response body.

    Attributes:
        other (dict): the OData error object (`code`, `message`, ...).
    """

    def __init__(self, odata_error):
        message = "The server has returned an error"
        if isinstance(odata_error, dict) and odata_error.get('message'):
            message += ': %s' % odata_error['message']
        GraphError.__init__(self, None, message)
        self.other = odata_error


_code2error = {
    400: HTTPBadRequestError,
    401: HTTPUnauthorizedError,
    403: HTTPForbiddenError,
    404: HTTPNotFoundError,
    500: HTTPInternalServerError,
    503: HTTPServiceUnavailableError
}


def handler(func):
    """Decorator who handles errors of the requests.

    Converts requests.exceptions.* into kurve.network.errors.
    """

    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except requests.exceptions.ConnectionError as error:
            raise ConnectionError(error)
        except requests.exceptions.Timeout as error:
            raise TimeoutError(error)
        except requests.exceptions.HTTPError as error:
            err_class = _code2error.get(error.response.status_code, HTTPError)
            raise err_class(error)
        except requests.exceptions.RequestException as error:
            raise GraphError(error)

    wrapper.__name__ = func.__name__
    wrapper.__doc__ = func.__doc__
    return wrapper
