import tests
from couchrecord.error import ArgumentError
from couchrecord.mvc.query import query_path, view_query


class QueryTest(tests.TestCase):

    def test_view_query(self):
        self.assertEqual(view_query({'name': 'McLovin'}),
                         'by_name/by_name?key=McLovin')

    def test_view_query_encoding(self):
        self.assertEqual(view_query({'name': 'Mc Lovin/2'}),
                         'by_name/by_name?key=Mc%20Lovin%2F2')
        self.assertEqual(view_query({'age': 18}), 'by_age/by_age?key=18')

    def test_view_query_keys(self):
        self.assertEqual(view_query({'active': True}),
                         'by_active/by_active?key=true')
        self.assertEqual(view_query({'active': False}),
                         'by_active/by_active?key=false')
        self.assertEqual(view_query({'parent': None}),
                         'by_parent/by_parent?key=')

    def test_malformed_filters(self):
        for params in [None, {}, {'name': 'a', 'age': 1}, 'name', [('name', 'a')]]:
            with self.assertRaises(ArgumentError):
                view_query(params)

    def test_query_path(self):
        self.assertEqual(query_path('people', {'params': {'name': 'McLovin'}}),
                         '/people/_view/by_name/by_name?key=McLovin')

    def test_from(self):
        path = '/people/_design/people/_view/adults'
        self.assertEqual(query_path('people', {'from': path}), path)
        self.assertEqual(query_path('people', {'from_': path}), path)
        with self.assertRaises(ArgumentError):
            query_path('people', {'from': 42})

    def test_missing_params(self):
        with self.assertRaises(ArgumentError):
            query_path('people')
        with self.assertRaises(ArgumentError):
            query_path('people', ['params'])
