# coding: utf-8
from setuptools import find_packages, setup


with open('README.md', encoding='utf8') as file:
    long_description = file.read()

setup(
    name='percolator-client',
    version='1.0',
    package_dir={'': 'src'},
    packages=find_packages('src'),
    license='MIT',
    description='Python client for the search engine _percolate endpoint',
    long_description=long_description,
    long_description_content_type='text/markdown',
    python_requires='>=3.8',
    install_requires=[
        'httpx',
        'requests',
    ],
    extras_require={
        'httpx': ['httpx'],
        'requests': ['requests'],
        'test': ['pytest'],
    },
)
