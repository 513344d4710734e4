# -*- coding: utf-8 -*-
from unittest import TestCase

from aiostomp_queue import headers


class TestEncode(TestCase):

    def test_encode_bool(self):
        self.assertEqual(headers.encode('durable', True), {
            'durable': 'true',
            '_type_durable': 'b',
        })
        self.assertEqual(headers.encode('durable', False), {
            'durable': 'false',
            '_type_durable': 'b',
        })

    def test_encode_int(self):
        self.assertEqual(headers.encode('prefetch-count', 123), {
            'prefetch-count': '123',
            '_type_prefetch-count': 'i',
        })

    def test_encode_string(self):
        self.assertEqual(headers.encode('x-queue-name', 'jobs'), {
            'x-queue-name': 'jobs',
            '_type_x-queue-name': 's',
        })

    def test_encode_property(self):
        self.assertEqual(headers.encode_property('retries', 3), {
            '_property_retries': '3',
            '_property__type_retries': 'i',
        })

    def test_encode_unsupported_type_raises(self):
        for value in (1.5, None, object()):
            with self.assertRaises(TypeError):
                headers.encode('key', value)

    def test_encode_headers_keeps_order(self):
        encoded = headers.encode_headers({'exclusive': True, 'prefetch-count': 2})

        self.assertEqual(list(encoded.items()), [
            ('exclusive', 'true'),
            ('_type_exclusive', 'b'),
            ('prefetch-count', '2'),
            ('_type_prefetch-count', 'i'),
        ])

    def test_encode_properties(self):
        encoded = headers.encode_properties({'name': 'foo', 'urgent': False})

        self.assertEqual(encoded, {
            '_property_name': 'foo',
            '_property__type_name': 's',
            '_property_urgent': 'false',
            '_property__type_urgent': 'b',
        })


class TestDecode(TestCase):

    def test_splits_headers_and_properties(self):
        plain, properties = headers.decode({
            'hkey': 'hvalue',
            '_property_key': 'value',
            '_property__type_key': 's',
            'redelivered': 'true',
        })

        self.assertEqual(plain, {'hkey': 'hvalue'})
        self.assertEqual(properties, {'key': 'value'})

    def test_decodes_typed_properties(self):
        _, properties = headers.decode({
            '_property_count': '42',
            '_property__type_count': 'i',
            '_property_flag': 'true',
            '_property__type_flag': 'b',
            '_property_off': 'false',
            '_property__type_off': 'b',
        })

        self.assertEqual(properties, {'count': 42, 'flag': True, 'off': False})

    def test_property_without_type_is_string(self):
        _, properties = headers.decode({'_property_key': '10'})

        self.assertEqual(properties, {'key': '10'})

    def test_unknown_type_tag_degrades_to_string(self):
        _, properties = headers.decode({
            '_property_ratio': '0.5',
            '_property__type_ratio': 'f',
        })

        self.assertEqual(properties, {'ratio': '0.5'})

    def test_invalid_int_degrades_to_string(self):
        _, properties = headers.decode({
            '_property_count': 'many',
            '_property__type_count': 'i',
        })

        self.assertEqual(properties, {'count': 'many'})

    def test_orphan_type_header_is_dropped(self):
        plain, properties = headers.decode({'_property__type_key': 's'})

        self.assertEqual(plain, {})
        self.assertEqual(properties, {})

    def test_decode_reverses_encode_properties(self):
        values = {'name': 'foo', 'count': 7, 'urgent': True}

        _, properties = headers.decode(headers.encode_properties(values))

        self.assertEqual(properties, values)
