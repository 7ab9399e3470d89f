# -*- coding: utf-8 -*-

import base64
from datetime import datetime, timedelta, timezone
from functools import partial
import json
import logging

from .network.errors import GraphError
from .promise import Deferred, Promise

_logger = logging.getLogger(__name__)


class InvalidTokenError(GraphError):
    def __init__(self, token, reason=None):
        GraphError.__init__(self, reason,
                            "The identity provider has returned an invalid "
                            "token.")
        self.text = token


def decode_token(token):
    """Decode the claims of a JWT token, without verifying the signature.

    Args:
        token (str): JWT token, in the form "header.payload.signature".
    Returns:
        dict: the claims.
    Raises:
        InvalidTokenError: if the token is malformed.
    """
    try:
        payload = token.split('.')[1]
        payload += '=' * (-len(payload) % 4)
        claims = json.loads(base64.urlsafe_b64decode(payload.encode('ascii'))
                            .decode('utf-8'))
        if not isinstance(claims, dict):
            raise ValueError('JWT payload is not an object')
        int(claims['exp'])
    except (AttributeError, IndexError, KeyError, TypeError,
            ValueError) as error:
        raise InvalidTokenError(token, error)
    return claims


def _expiry(claims):
    return datetime.fromtimestamp(int(claims['exp']), tz=timezone.utc)


def _now():
    return datetime.now(tz=timezone.utc)


class Identity(object):
    """OAuth2 identity of the user, and cache of its access tokens.

    The acquisition of the tokens (login window, implicit flow, device code
    flow, ...) is delegated to the providers. A provider is a callable
    returning a raw JWT token, or a Promise of a token.

    If an executor is set, the providers are called in its worker threads.

    Attributes:
        client_id (str): OAuth2 client ID of the application.
        redirect_uri (str): OAuth2 redirect URI of the application.
        dispatcher (callable): dispatcher of the promises returned.
    """

    # Cached access tokens are renewed when they expire in less than that.
    EXPIRATION_MARGIN = timedelta(seconds=60)

    def __init__(self, token_provider, id_token_provider=None,
                 client_id='', redirect_uri='', executor=None,
                 dispatcher=None):
        """
        Args:
            token_provider (callable): receives the resource URL, returns an
                access token for this resource.
            id_token_provider (callable, optional): returns an id token.
                Required by `login_async()`.
            executor (ThreadPoolExecutor, optional)
            dispatcher (callable, optional)
        """
        self.client_id = client_id
        self.redirect_uri = redirect_uri
        self.dispatcher = dispatcher
        self._token_provider = token_provider
        self._id_token_provider = id_token_provider
        self._executor = executor
        self._token_cache = {}
        self._id_token = None

    def login_async(self):
        """Get the id token of the user, and keep its identity.

        Returns:
            Promise<None>: resolved when the user is logged.
        """
        if self._id_token_provider is None:
            return Promise.reject(ValueError('No id token provider'),
                                  self.dispatcher)
        return self._call_provider(self._id_token_provider) \
            .then(self._on_id_token)

    def _on_id_token(self, token):
        claims = decode_token(token)
        self._id_token = {
            'token': token,
            'expiry': _expiry(claims),
            'upn': claims.get('upn'),
            'tenant_id': claims.get('tid'),
            'family_name': claims.get('family_name'),
            'given_name': claims.get('given_name'),
            'name': claims.get('name')
        }
        _logger.info('Logged in as %s', self._id_token['upn'])

    def get_id_token(self):
        """Returns the id token infos (dict) of the logged user, or None."""
        return self._id_token

    def is_logged_in(self):
        if not self._id_token:
            return False
        return self._id_token['expiry'] > _now()

    def logout(self):
        """Forget the identity of the user and all the tokens."""
        _logger.debug('Logout; %s access tokens dropped',
                      len(self._token_cache))
        self._id_token = None
        self._token_cache = {}

    def get_access_token_async(self, resource):
        """Get an access token for the resource.

        A cached token is used until it expires in less than
        `EXPIRATION_MARGIN`.

        Args:
            resource (str): resource URL, ex: 'https://graph.microsoft.com'
        Returns:
            Promise<str>: the access token.
        """
        cached_token = self._token_cache.get(resource)
        if cached_token:
            if cached_token['expiry'] > _now() + self.EXPIRATION_MARGIN:
                return Promise.resolve(cached_token['token'],
                                       self.dispatcher)

        _logger.debug('Request new access token for %s', resource)
        return self._call_provider(self._token_provider, resource) \
            .then(partial(self._on_access_token, resource))

    def _on_access_token(self, resource, token):
        claims = decode_token(token)
        self._token_cache[resource] = {
            'resource': resource,
            'token': token,
            'expiry': _expiry(claims)
        }
        return token

    def _call_provider(self, provider, *args):
        if self._executor is not None:
            return self._executor.submit(provider, *args)

        df = Deferred(self.dispatcher)
        try:
            df.resolve(provider(*args))
        except Exception as error:
            df.reject(error)
        return df.promise
