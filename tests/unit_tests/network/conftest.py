# -*- coding: utf-8 -*-

import pytest
from dummy_http_server import DummyHttpServer


@pytest.fixture
def http_server():
    """Local HTTP server answering the requests of `kurve.network.get()`.

    Yields:
        DummyHttpServer: a server bound to a free port. It must be entered
            (``with http_server:``) to handle requests. The listening socket
            is closed after the test.
    """
    httpd = DummyHttpServer()
    yield httpd
    httpd.close()
