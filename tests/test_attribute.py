from decimal import Decimal
import tests
from couchrecord.error import ArgumentError, AttributeTypeError
from couchrecord.mvc.attribute import Attribute, HasManyAssociation


class AttributeTest(tests.TestCase):

    def test_defaults(self):
        attribute = Attribute('name')
        self.assertEqual(attribute.type, 'text')
        self.assertEqual(attribute.wire_name, 'name')
        self.assertIsNone(attribute.value)
        self.assertFalse(attribute.is_set())
        self.assertEqual(attribute.to_dict(), {})

    def test_unknown_type(self):
        with self.assertRaises(ValueError):
            Attribute('name', 'hash')

    def test_wire_name(self):
        attribute = Attribute('id', wire_name='_id')
        attribute.value = 'abc'
        self.assertEqual(attribute.to_dict(), {'_id': 'abc'})

    def test_type_check(self):
        age = Attribute('age', 'number')
        age.value = 18
        self.assertEqual(age.value, 18)
        for value in ['18', 18.5, True]:
            with self.assertRaises(AttributeTypeError):
                age.value = value

        name = Attribute('name')
        with self.assertRaises(AttributeTypeError):
            name.value = 42

        flag = Attribute('flag', 'boolean')
        flag.value = False
        self.assertIs(flag.value, False)
        with self.assertRaises(AttributeTypeError):
            flag.value = 0

    def test_none_always_accepted(self):
        age = Attribute('age', 'number', 4)
        age.value = None
        self.assertFalse(age.is_set())

    def test_coercion(self):
        price = Attribute('price', 'decimal')
        price.value = Decimal('2.5')
        self.assertEqual(price.value, 2.5)
        self.assertIsInstance(price.value, float)
        price.value = 3
        self.assertIsInstance(price.value, float)

        tags = Attribute('tags', 'list')
        tags.value = ('a', 'b')
        self.assertEqual(tags.value, ['a', 'b'])

    def test_bad_default(self):
        with self.assertRaises(AttributeTypeError):
            Attribute('age', 'number', 'old')

    def test_copy_isolates_default(self):
        template = Attribute('tags', 'list', [])
        first, second = template.copy(), template.copy()
        first.value.append('x')
        self.assertEqual(second.value, [])
        self.assertEqual(template.default, [])


class Item:

    def __init__(self, data):
        self.data = dict(data)

    def to_dict(self):
        return self.data


class HasManyAssociationTest(tests.TestCase):

    def test_model_name(self):
        self.assertEqual(HasManyAssociation('people').model_name, 'Person')
        self.assertEqual(HasManyAssociation('line_items').model_name,
                         'LineItem')
        self.assertEqual(HasManyAssociation('brews', 'Beer').model_name,
                         'Beer')
        self.assertEqual(HasManyAssociation('things', Item).model_name,
                         'Item')

    def test_singular(self):
        self.assertEqual(HasManyAssociation('people').singular, 'person')

    def test_bind(self):
        template = HasManyAssociation('items', Item)
        live = template.bind(Item)
        live.build({'a': 1})
        self.assertEqual(template.container, [])
        self.assertEqual(live.to_dict(), {'items': [{'a': 1}]})

    def test_push_checks_type(self):
        live = HasManyAssociation('items').bind(Item)
        item = Item({})
        self.assertIs(live.push(item), item)
        with self.assertRaises(ArgumentError):
            live.push('not an item')

    def test_empty_to_dict(self):
        self.assertEqual(HasManyAssociation('items').to_dict(), {'items': []})
