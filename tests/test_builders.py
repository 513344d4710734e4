# -*- coding: utf-8 -*-
from unittest import TestCase

from aiostomp_queue.builders import (
    ActiveMqFrameBuilder,
    ArtemisFrameBuilder,
    FrameBuilder,
    RabbitMqFrameBuilder,
    builder_for,
)
from aiostomp_queue.frame import Frame


class TestFrameBuilder(TestCase):

    def setUp(self):
        self.message = Frame('MESSAGE', {
            'subscription': 'sub-1',
            'message-id': '007',
            'ack': 'ack-007',
        }, 'body')

    def test_build_subscribe_frame(self):
        frame = FrameBuilder().build_subscribe_frame('sub-1', '/queue/test', 'client')

        self.assertEqual(frame.command, 'SUBSCRIBE')
        self.assertEqual(frame.headers, {
            'destination': '/queue/test',
            'ack': 'client',
            'id': 'sub-1',
        })

    def test_build_subscribe_frame_with_selector(self):
        frame = FrameBuilder().build_subscribe_frame(
            'sub-1', '/queue/test', 'auto', selector="type = 'a'")

        self.assertEqual(frame['selector'], "type = 'a'")

    def test_build_ack_frame_stomp_11(self):
        frame = FrameBuilder('1.1').build_ack_frame(self.message, 'sub-1')

        self.assertEqual(frame.command, 'ACK')
        self.assertEqual(frame.headers, {
            'message-id': '007',
            'subscription': 'sub-1',
        })

    def test_build_ack_frame_stomp_12(self):
        frame = FrameBuilder('1.2').build_ack_frame(self.message, 'sub-1')

        self.assertEqual(frame.headers, {'id': 'ack-007'})

    def test_build_nack_frame(self):
        frame = FrameBuilder('1.1').build_nack_frame(self.message, 'sub-1')

        self.assertEqual(frame.command, 'NACK')
        self.assertEqual(frame.headers, {
            'message-id': '007',
            'subscription': 'sub-1',
        })

    def test_build_send_frame(self):
        frame = FrameBuilder().build_send_frame(
            '/queue/test', 'ç', {'_property_a': '1'})

        self.assertEqual(frame.command, 'SEND')
        self.assertEqual(frame.headers, {
            '_property_a': '1',
            'destination': '/queue/test',
            'content-length': '2',
        })
        self.assertEqual(frame.body, b'\xc3\xa7')


class TestBrokerBuilders(TestCase):

    def test_rabbitmq_adds_prefetch_count(self):
        frame = RabbitMqFrameBuilder().build_subscribe_frame('1', '/queue/a', 'client')

        self.assertEqual(frame['prefetch-count'], '1')

    def test_activemq_adds_prefetch_size_when_acking(self):
        builder = ActiveMqFrameBuilder(client_id='worker')

        frame = builder.build_subscribe_frame('1', '/queue/a', 'client')

        self.assertEqual(frame['activemq.prefetchSize'], '1')
        self.assertEqual(frame['activemq.subscriptionName'], 'worker')

    def test_activemq_auto_ack_has_no_prefetch_size(self):
        frame = ActiveMqFrameBuilder().build_subscribe_frame('1', '/queue/a', 'auto')

        self.assertNotIn('activemq.prefetchSize', frame)
        self.assertNotIn('activemq.subscriptionName', frame)

    def test_builder_for_extension(self):
        self.assertIsInstance(builder_for('rabbitmq'), RabbitMqFrameBuilder)
        self.assertIsInstance(builder_for('activemq'), ActiveMqFrameBuilder)
        self.assertIsInstance(builder_for('artemis'), ArtemisFrameBuilder)

        builder = builder_for('artemis', '1.2', 'me')
        self.assertEqual(builder.version, '1.2')
        self.assertEqual(builder.client_id, 'me')
