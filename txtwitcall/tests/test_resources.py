from twisted.trial.unittest import TestCase

from txtwitcall.error import InvalidDeclaration
from txtwitcall.resources import (
    RESOURCES, ResourceDeclaration, load_resources)


class TestResourceDeclaration(TestCase):
    def test_from_tuple(self):
        decl = ResourceDeclaration.from_tuple(
            ('GET', 'statuses/show/:id', {'id': True}))
        self.assertEqual(decl.method, 'GET')
        self.assertEqual(decl.path, 'statuses/show/:id')
        self.assertEqual(decl.rules, {'id': True})

    def test_from_tuple_without_rules(self):
        decl = ResourceDeclaration.from_tuple(['post', 'anything'])
        self.assertEqual(decl, ('POST', 'anything', None))

    def test_from_tuple_declaration(self):
        decl = ResourceDeclaration('GET', 'foo', None)
        self.assertIs(ResourceDeclaration.from_tuple(decl), decl)

    def test_from_tuple_too_short(self):
        err = self.assertRaises(
            InvalidDeclaration, ResourceDeclaration.from_tuple, ('GET',),
            'get_foo')
        self.assertTrue(str(err).startswith('get_foo: '))

    def test_from_tuple_too_long(self):
        self.assertRaises(
            InvalidDeclaration, ResourceDeclaration.from_tuple,
            ('GET', 'foo', {}, 'extra'))

    def test_from_tuple_not_a_sequence(self):
        self.assertRaises(
            InvalidDeclaration, ResourceDeclaration.from_tuple, 42)

    def test_from_tuple_bad_types(self):
        self.assertRaises(
            InvalidDeclaration, ResourceDeclaration.from_tuple, (1, 'foo'))
        self.assertRaises(
            InvalidDeclaration, ResourceDeclaration.from_tuple,
            ('GET', 'foo', ['id']))

    def test_from_tuple_copies_rules(self):
        rules = {'id': True}
        decl = ResourceDeclaration.from_tuple(('GET', 'foo/:id', rules))
        rules['extra'] = False
        self.assertEqual(decl.rules, {'id': True})


class TestLoadResources(TestCase):
    def test_load_resources(self):
        table = load_resources({
            'a': ('GET', 'a'),
            'b': ('POST', 'b/:id', {'id': True}),
        })
        self.assertEqual(table, {
            'a': ResourceDeclaration('GET', 'a', None),
            'b': ResourceDeclaration('POST', 'b/:id', {'id': True}),
        })

    def test_load_resources_invalid(self):
        self.assertRaises(
            InvalidDeclaration, load_resources, {'a': ('GET', 'a'), 'b': ()})

    def test_bundled_resources(self):
        """
        Every bundled resource is a valid declaration whose required
        arguments are all known.
        """
        for name, decl in RESOURCES.items():
            self.assertIsInstance(decl, ResourceDeclaration)
            self.assertIn(decl.method, ('GET', 'POST'))
            self.assertFalse(decl.path.endswith('.json'), name)
            self.assertNotEqual(decl.rules, None, name)

    def test_bundled_path_arguments_are_required(self):
        import re
        for name, decl in RESOURCES.items():
            for arg in re.findall(r':(\w+)', decl.path):
                self.assertEqual(decl.rules.get(arg), True, name)

    def test_get_tweet(self):
        self.assertEqual(RESOURCES['get_tweet'].method, 'GET')
        self.assertEqual(RESOURCES['get_tweet'].path, 'statuses/show/:id')
        self.assertEqual(RESOURCES['get_tweet'].rules['id'], True)
