# -*- coding: utf-8 -*-

from .graph import Graph
from .models import (Collection, GraphObject, Group, Groups, Message,
                     Messages, ProfilePhoto, User, Users)

__all__ = ['Graph', 'Collection', 'GraphObject', 'Group', 'Groups',
           'Message', 'Messages', 'ProfilePhoto', 'User', 'Users']
