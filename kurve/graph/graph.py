# -*- coding: utf-8 -*-

import logging
from urllib.parse import quote

import requests

from .. import network
from ..common import config
from ..promise import Promise, ThreadPoolExecutor, get_task_queue
from .models import Group, Groups, Messages, ProfilePhoto, User, Users

_logger = logging.getLogger(__name__)


class Graph(object):
    """Client of the Graph API.

    The requests are authenticated either with a default access token, or
    with the tokens of an `Identity`. All methods are asynchronous: the
    requests are executed by a thread pool, and the results are returned as
    Promise instances, settled through the dispatcher of the client.

    Example:

        >>> graph = Graph(access_token='...')
        >>> p = graph.me_async().then(lambda user: user.data['displayName'])
        >>> get_task_queue().run_until_settled(p, 10)
        'Adele Vance'
    """

    def __init__(self, identity=None, access_token=None, base_url=None,
                 resource=None, timeout=None, executor=None, dispatcher=None,
                 session=None):
        """
        Args:
            identity (Identity, optional): provides the access tokens.
            access_token (str, optional): token used for all requests. One of
                `identity` and `access_token` is required.
            base_url (str, optional): default to the 'graph_url' config.
            resource (str, optional): resource requested to the identity.
                Default to the 'resource' config.
            timeout (int, optional): default to the 'request_timeout' config.
            executor (ThreadPoolExecutor, optional): executes the requests.
                By default, a new pool of 'max_workers' threads, shut down
                by `close()`. A pool given here is left open.
            dispatcher (callable, optional): default to the TaskQueue of the
                current thread.
            session (requests.Session, optional)
        """
        if identity is None and access_token is None:
            raise ValueError('Graph requires an identity or an access token')

        if dispatcher is None:
            dispatcher = get_task_queue()
        self.dispatcher = dispatcher

        self._identity = identity
        self._access_token = access_token
        self._base_url = base_url or config.get('graph_url')
        if not self._base_url.endswith('/'):
            self._base_url += '/'
        self._resource = resource or config.get('resource')
        self._timeout = timeout or config.get('request_timeout')
        self._own_executor = executor is None
        if executor is None:
            executor = ThreadPoolExecutor(config.get('max_workers'),
                                          dispatcher)
        self._executor = executor
        self._session = session or requests.Session()

    def close(self):
        if self._own_executor:
            self._executor.shutdown(wait=False)
        self._session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    # Users

    def me_async(self, odata_query=None):
        """Returns: Promise<User>: the logged user."""
        url = self._with_query(self._base_url + 'me/', odata_query)
        return self.get_object_async(url, User)

    def user_async(self, user_id):
        """Returns: Promise<User>"""
        return self.get_object_async(self._user_url(user_id), User)

    def users_async(self, odata_query=None):
        """Returns: Promise<Users>"""
        url = self._with_query(self._base_url + 'users/', odata_query)
        return self.get_collection_async(url, Users)

    # Groups

    def group_async(self, group_id):
        """Returns: Promise<Group>"""
        url = self._base_url + 'groups/' + quote(group_id, safe='')
        return self.get_object_async(url, Group)

    def groups_async(self, odata_query=None):
        """Returns: Promise<Groups>"""
        url = self._with_query(self._base_url + 'groups/', odata_query)
        return self.get_collection_async(url, Groups)

    # Relationships of a user

    def messages_for_user_async(self, user_principal_name, odata_query=None):
        """Returns: Promise<Messages>"""
        url = self._with_query(
            self._user_url(user_principal_name, 'messages'), odata_query)
        return self.get_collection_async(url, Messages)

    def member_of_for_user_async(self, user_principal_name,
                                 odata_query=None):
        """Returns: Promise<Groups>: groups the user is member of."""
        url = self._with_query(
            self._user_url(user_principal_name, 'memberOf'), odata_query)
        return self.get_collection_async(url, Groups)

    def manager_for_user_async(self, user_principal_name, odata_query=None):
        """Returns: Promise<User>"""
        url = self._with_query(
            self._user_url(user_principal_name, 'manager'), odata_query)
        return self.get_object_async(url, User)

    def direct_reports_for_user_async(self, user_principal_name,
                                      odata_query=None):
        """Returns: Promise<Users>"""
        url = self._with_query(
            self._user_url(user_principal_name, 'directReports'), odata_query)
        return self.get_collection_async(url, Users)

    def profile_photo_for_user_async(self, user_principal_name):
        """Returns: Promise<ProfilePhoto>: metadata of the photo."""
        url = self._user_url(user_principal_name, 'photo')
        return self.get_object_async(url, ProfilePhoto)

    def profile_photo_value_for_user_async(self, user_principal_name):
        """Returns: Promise<bytes>: content of the photo."""
        url = self._user_url(user_principal_name, 'photo/$value')
        return self.get_async(url, binary=True)

    # Generic requests

    def get_async(self, url, binary=False):
        """Send an authenticated GET request.

        Args:
            url (str): absolute URL.
            binary (boolean, optional): if True, the body is returned as
                bytes.
        Returns:
            Promise<str>: body of the response.
        """
        def send(token):
            _logger.debug('GET %s', url)
            return self._executor.submit(network.get, url, self._session,
                                         token, binary=binary,
                                         timeout=self._timeout)

        return self._get_access_token().then(send)

    def get_object_async(self, url, object_class):
        """Load a single object.

        Returns:
            Promise<GraphObject>: instance of `object_class`.
        """
        def build(text):
            return object_class(self, network.parse_odata(text))

        return self.get_async(url).then(build)

    def get_collection_async(self, url, collection_class):
        """Load a page of objects.

        A response without `value` member is a page of one object.

        Returns:
            Promise<Collection>: instance of `collection_class`.
        """
        def build(text):
            content = network.parse_odata(text)
            if 'value' in content:
                items = content['value']
            else:
                items = [content]
            item_class = collection_class.item_class
            return collection_class(
                self, [item_class(self, item) for item in items],
                content.get('@odata.nextLink'))

        return self.get_async(url).then(build)

    def _get_access_token(self):
        if self._access_token is not None:
            return Promise.resolve(self._access_token, self.dispatcher)
        return self._identity.get_access_token_async(self._resource)

    def _user_url(self, user_id, relation=None):
        url = self._base_url + 'users/' + quote(user_id, safe='@')
        if relation:
            url += '/' + relation
        return url

    @staticmethod
    def _with_query(url, odata_query):
        if odata_query:
            return url + '?' + odata_query
        return url
