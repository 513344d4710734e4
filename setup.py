# -*- coding:utf-8 -*-
import os
import re

from setuptools import find_packages, setup


def read_version():
    path = os.path.join(os.path.dirname(__file__), 'aiostomp_queue', '__init__.py')
    with open(path) as init:
        return re.search(r"__version__ = '([^']+)'", init.read()).group(1)


setup(
    name='aiostomp-queue',
    version=read_version(),
    description='STOMP consumer adapter with typed headers for asyncio applications',
    long_description='Receive and acknowledge messages from ActiveMQ, RabbitMQ and '
                     'Artemis over STOMP through a broker-agnostic consumer interface.',
    classifiers=[],
    keywords='stomp queue consumer activemq rabbitmq artemis',
    author='Pedro Kiefer',
    author_email='pedro@kiefer.com.br',
    license='MIT',
    include_package_data=True,
    packages=find_packages(exclude=["tests", "tests.*"]),
    platforms=['any'],
    python_requires='>=3.8',
    install_requires=[
        'async-timeout',
        'bumpversion'
    ],
    extras_require={
        'tests': [
            'mock',
            'coverage',
            'pytest',
            'pytest-cov',
            'flake8',
        ]
    }
)
