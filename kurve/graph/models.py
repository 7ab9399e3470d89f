# -*- coding: utf-8 -*-


class GraphObject(object):
    """Object returned by the Graph API.

    Attributes:
        graph (Graph): client used to load the object.
        data (dict): JSON content of the object, as returned by the server.
    """

    def __init__(self, graph, data):
        self.graph = graph
        self._data = data

    @property
    def data(self):
        return self._data

    def __repr__(self):
        return '%s(%s)' % (self.__class__.__name__, self._data.get('id'))


class User(GraphObject):
    """A directory user.

    All the async methods are passthroughs to the Graph client, using the
    `userPrincipalName` of the user.
    """

    @property
    def user_principal_name(self):
        return self._data.get('userPrincipalName')

    def member_of_async(self, odata_query=None):
        return self.graph.member_of_for_user_async(self.user_principal_name,
                                                   odata_query)

    def messages_async(self, odata_query=None):
        return self.graph.messages_for_user_async(self.user_principal_name,
                                                  odata_query)

    def manager_async(self, odata_query=None):
        return self.graph.manager_for_user_async(self.user_principal_name,
                                                 odata_query)

    def direct_reports_async(self, odata_query=None):
        return self.graph.direct_reports_for_user_async(
            self.user_principal_name, odata_query)

    def profile_photo_async(self):
        return self.graph.profile_photo_for_user_async(
            self.user_principal_name)

    def profile_photo_value_async(self):
        return self.graph.profile_photo_value_for_user_async(
            self.user_principal_name)


class Group(GraphObject):
    pass


class Message(GraphObject):
    pass


class ProfilePhoto(GraphObject):
    """Metadata of a profile photo (`id`, `height`, `width`)."""
    pass


class Collection(object):
    """Page of objects returned by the Graph API.

    When the server has more results, `next_link_async()` loads the next page.

    Attributes:
        data (list): objects of the page.
        next_link (str): URL of the next page, or None.
    """

    item_class = GraphObject

    def __init__(self, graph, data, next_link=None):
        self.graph = graph
        self._data = data
        self.next_link = next_link

    @property
    def data(self):
        return self._data

    def next_link_async(self):
        """Load the next page.

        Returns:
            Promise<Collection>: next page, of the same type as self. None if
                there is no next page.
        """
        if not self.next_link:
            return None
        return self.graph.get_collection_async(self.next_link, type(self))

    def __len__(self):
        return len(self._data)

    def __iter__(self):
        return iter(self._data)

    def __repr__(self):
        return '%s(%s items%s)' % (self.__class__.__name__, len(self._data),
                                   ', more' if self.next_link else '')


class Users(Collection):
    item_class = User


class Groups(Collection):
    item_class = Group


class Messages(Collection):
    item_class = Message
