# -*- coding: utf-8 -*-

import logging
import os

from kurve.common import path
from kurve.common.path import _ensure_dir_exists

"""### TEST CASES ###
    _ensure_dir_exists, dir exists
    _ensure_dir_exists, dir does not exist
    _ensure_dir_exists, a file has the same name

    get_config_dir and get_log_dir create their folder
"""


class TestEnsureDirExists(object):

    def test_dir_already_exists(self, tmpdir, caplog):
        with caplog.at_level(logging.DEBUG, logger='kurve'):
            _ensure_dir_exists(str(tmpdir))
        assert caplog.text == ''

    def test_dir_does_not_exist(self, tmpdir):
        new_path = str(tmpdir.join('a', 'b'))
        _ensure_dir_exists(new_path)
        assert os.path.isdir(new_path)

    def test_file_in_place_of_dir(self, tmpdir, caplog):
        file_path = tmpdir.join('file')
        file_path.write('content')

        with caplog.at_level(logging.WARNING, logger='kurve'):
            _ensure_dir_exists(str(file_path))
        assert 'Unable to create the missing folder' in caplog.text


class TestUserDirs(object):

    class FakeAppDirs(object):
        def __init__(self, root):
            self.user_log_dir = os.path.join(root, 'logs')
            self.user_config_dir = os.path.join(root, 'config')

    def test_dirs_are_created(self, tmpdir, monkeypatch):
        monkeypatch.setattr(path, '_appdirs', self.FakeAppDirs(str(tmpdir)))

        assert path.get_log_dir() == str(tmpdir.join('logs'))
        assert path.get_config_dir() == str(tmpdir.join('config'))
        assert tmpdir.join('logs').check(dir=1)
        assert tmpdir.join('config').check(dir=1)
