# -*- coding: utf-8 -*-

from .__version__ import __version__  # noqa

import argparse
import logging
import os

from .common import config
from .common import log
from .graph import Graph
from .identity import Identity
from .network.errors import GraphError
from .promise import (Deferred, Promise, RejectionError, TimeoutError,
                      get_task_queue, reduce_coroutine)

__all__ = ['Deferred', 'Promise', 'Graph', 'Identity', 'main']


@reduce_coroutine()
def _show_me(graph):
    user = yield graph.me_async()
    groups = yield user.member_of_async()

    lines = ['%s <%s>' % (user.data.get('displayName'),
                          user.user_principal_name)]
    lines += ['  member of: %s' % group.data.get('displayName')
              for group in groups]
    yield lines


def _show_users(graph):
    return graph.users_async().then(
        lambda users: [user.data.get('displayName') for user in users])


def _show_groups(graph):
    return graph.groups_async().then(
        lambda groups: [group.data.get('displayName') for group in groups])


_commands = {
    'me': _show_me,
    'users': _show_users,
    'groups': _show_groups
}


def main(argv=None):
    """Entry point of the kurve command."""
    parser = argparse.ArgumentParser(
        prog='kurve', description='Query the Graph API.')
    parser.add_argument('command', choices=sorted(_commands))
    parser.add_argument('--token',
                        default=os.environ.get('KURVE_ACCESS_TOKEN'),
                        help='access token (default: $KURVE_ACCESS_TOKEN)')
    parser.add_argument('--debug', action='store_true')
    parser.add_argument('--timeout', type=float, default=60)
    args = parser.parse_args(argv)

    if not args.token:
        parser.error('an access token is required')

    with log.Context():
        logger = logging.getLogger(__name__)

        config.load()
        log.set_debug_mode(args.debug or config.get('debug_mode'))
        log.set_logs_level(config.get('log_levels'))

        queue = get_task_queue()
        with Graph(access_token=args.token, dispatcher=queue) as graph:
            try:
                lines = queue.run_until_settled(
                    _commands[args.command](graph), args.timeout)
            except (GraphError, RejectionError, TimeoutError) as error:
                logger.error('Command "%s" has failed: %s', args.command,
                             error)
                return 1

        for line in lines:
            print(line)
    return 0


if __name__ == "__main__":
    main()
