import json

from twisted.trial.unittest import TestCase

from txtwitcall.keys import load_keys


class TestLoadKeys(TestCase):
    def _write_keys(self, keys):
        path = self.mktemp()
        with open(path, 'w') as kfile:
            json.dump(keys, kfile)
        return path

    def test_no_sources(self):
        self.assertEqual(load_keys(), {
            'consumer_key': None,
            'consumer_secret': None,
            'oauth_token': None,
            'oauth_token_secret': None,
        })

    def test_from_dicts(self):
        keys = load_keys(
            {'consumer_key': 'ck', 'consumer_secret': 'cs', 'other': 'x'},
            {'oauth_token': 'ot', 'oauth_token_secret': 'ots'})
        self.assertEqual(keys, {
            'consumer_key': 'ck',
            'consumer_secret': 'cs',
            'oauth_token': 'ot',
            'oauth_token_secret': 'ots',
        })

    def test_from_file(self):
        path = self._write_keys({
            'consumer_key': 'ck',
            'consumer_secret': 'cs',
        })
        keys = load_keys(path)
        self.assertEqual(keys['consumer_key'], 'ck')
        self.assertEqual(keys['consumer_secret'], 'cs')
        self.assertEqual(keys['oauth_token'], None)

    def test_later_sources_override(self):
        path = self._write_keys({'consumer_key': 'file-ck'})
        keys = load_keys(
            {'consumer_key': 'dict-ck', 'consumer_secret': 'cs'}, path)
        self.assertEqual(keys['consumer_key'], 'file-ck')
        self.assertEqual(keys['consumer_secret'], 'cs')

    def test_none_does_not_override(self):
        keys = load_keys({'consumer_key': 'ck'}, {'consumer_key': None})
        self.assertEqual(keys['consumer_key'], 'ck')

    def test_invalid_source_type(self):
        err = self.assertRaises(TypeError, load_keys, {}, 42)
        self.assertEqual(str(err), "argument #2: invalid type int")

    def test_file_not_an_object(self):
        path = self._write_keys(['consumer_key'])
        self.assertRaises(ValueError, load_keys, path)

    def test_missing_file(self):
        self.assertRaises(IOError, load_keys, self.mktemp())
