#
# Copyright (c) 2023 Radiance Technologies, Inc.
#
# This file is part of SEXPKIT.
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Lesser General Public License as
# published by the Free Software Foundation, either version 3 of the
# License, or (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Lesser General Public License for more details.
#
# You should have received a copy of the GNU Lesser General Public
# License along with this program. If not, see
# <http://www.gnu.org/licenses/>.
#
"""
Test suite for `sexpkit.config.field`.
"""

import unittest

from sexpkit.config import SexpConfig, SexpConfigException, SexpConfigField


class ServerSettings:
    """
    Settings bound to a configuration.
    """

    host = SexpConfigField("server.host")
    port = SexpConfigField("server.port", int)
    ratio = SexpConfigField("server.ratio", float, required=False)
    debug = SexpConfigField("server.debug", bool, required=False)
    workers = SexpConfigField("server.workers", int, False, 1)
    features = SexpConfigField("server.features", list, required=False)

    def __init__(self, config: SexpConfig):
        self.config = config


class TestSexpConfigField(unittest.TestCase):
    """
    Test suite for `SexpConfigField`.
    """

    def test_get(self):
        """
        Verify that fields read typed values.
        """
        settings = ServerSettings(
            SexpConfig.from_string(
                """
                (server
                 (host "localhost")
                 (port 8080)
                 (ratio 0.5)
                 (debug false)
                 (features (auth logging)))
                """))
        self.assertEqual(settings.host, "localhost")
        self.assertEqual(settings.port, 8080)
        self.assertEqual(settings.ratio, 0.5)
        self.assertIs(settings.debug, False)
        self.assertEqual(settings.workers, 1)
        self.assertEqual(settings.features, ["auth", "logging"])

    def test_missing(self):
        """
        Verify handling of missing values.
        """
        settings = ServerSettings(
            SexpConfig.from_string("(server (port eighty) (workers 3))"))
        self.assertIsNone(settings.debug)
        self.assertIsNone(settings.features)
        self.assertEqual(settings.workers, 3)
        with self.assertRaises(SexpConfigException) as cm:
            settings.host
        self.assertEqual(cm.exception.path, "server.host")
        with self.assertRaises(SexpConfigException) as cm:
            settings.port
        self.assertEqual(cm.exception.path, "server.port")

    def test_descriptor(self):
        """
        Verify descriptor protocol details.
        """
        field = ServerSettings.port
        self.assertIsInstance(field, SexpConfigField)
        self.assertEqual(field.name, "port")
        self.assertEqual(
            repr(field),
            "SexpConfigField('server.port', int, required=True)")
        settings = ServerSettings(SexpConfig.from_string("(server)"))
        with self.assertRaises(AttributeError):
            settings.port = 80
        with self.assertRaises(TypeError):
            SexpConfigField("server.port", dict)

    def test_config_attr(self):
        """
        Verify that the configuration attribute name can be changed.
        """

        class Client:
            retries = SexpConfigField(
                "client.retries",
                int,
                config_attr="settings")

            def __init__(self, settings):
                self.settings = settings

        client = Client(SexpConfig.from_string("(client (retries 5))"))
        self.assertEqual(client.retries, 5)


if __name__ == '__main__':
    unittest.main()
