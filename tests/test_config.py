"""
Assert basic configuration capabilities are supported
"""

import tests
from couchrecord import DEFAULT_SITE, config
from couchrecord.config import flatten, Configuration, ALLOWED_CONFIG, ConfigurationError


class ConfigTest(tests.TestCase):
    """Unit tests for couchrecord's configuration file use"""

    def test_flat(self):
        data = {
            'site': 'http://db.local:5984/',
            'log': {
                'level': 'DEBUG',
                'file': '/tmp/couchrecord.log',
            },
            'http_headers': {
                'User-Agent': 'test'
            },
        }
        flat_data = {
            'site': 'http://db.local:5984/',
            'log_level': 'DEBUG',
            'log_file': '/tmp/couchrecord.log',
            'http_headers': {
                'User-Agent': 'test'
            },
        }
        self.assertEqual(flatten(data), flat_data)

    def test_bad_type(self):
        data = """---
site: 5984"""

        with self.assertRaises(ConfigurationError):
            Configuration.create_from_string(data)

    def test_bool_timeout(self):
        data = """---
timeout: yes"""

        with self.assertRaises(ConfigurationError):
            Configuration.create_from_string(data)

    def test_float_timeout(self):
        c = Configuration.create_from_string("timeout: 2.5")
        self.assertEqual(c.timeout, 2.5)

    def test_merge(self):
        fields1 = {'a': 1, 'b': 3}
        fields2 = {'a': 5}
        fields3 = {'c': 0, 'd': 0, 'e': 0}
        c1, c2, c3 = Configuration(fields1), Configuration(
            fields2), Configuration(fields3)

        merged = c1 | c2 | c3
        expected = Configuration(dict(a=5, b=3, c=0, d=0, e=0))

        self.assertEqual(merged._fields, expected._fields)

    def test_completion(self):
        c = Configuration.default()

        for field in ALLOWED_CONFIG.flatten():
            self.assertEqual(getattr(c, field.key, None), field.default())

        self.assertEqual(c.site, DEFAULT_SITE)
        self.assertEqual(c.log_level, 'INFO')

    def test_access(self):
        fields = {'a': 1, 'b': 2}
        c = Configuration(fields)
        self.assertEqual(getattr(c, 'a', None), 1)
        self.assertEqual(getattr(c, 'b', None), 2)
        self.assertIsNone(getattr(c, 'c', None))

    def test_assets(self):
        loaded = Configuration.create_from_file(tests.CONFIGURATION_FILE)
        self.assertNotEqual(loaded, Configuration.default())
        self.assertEqual(loaded.site, tests.SITE)
        self.assertEqual(loaded.http_headers,
                         {'User-Agent': 'couchrecord-tests'})

    def test_missing_file(self):
        self.assertEqual(
            Configuration.create_from_file(tests.ASSETS / 'missing.yaml',
                                           complete=True),
            Configuration.default())

    def test_test_configuration(self):
        self.assertEqual(config.CONFIGURATION.site, tests.SITE)
        self.assertEqual(config.CONFIGURATION.timeout, 5)

    def test_template(self):
        template = ALLOWED_CONFIG.template()
        self.assertIn('site: ' + DEFAULT_SITE, template)
        self.assertIn('log:', template)
