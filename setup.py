from setuptools import setup, find_packages

__version__ = '0.3.0'

requirements = [
    'pymongo>=4.0',
    'coloredlogs>=15.0',
    'iso8601>=1.0',
    'sanic>=22.9',
    'sanic-cors>=2.2',
]

test_requirements = [
    'pytest',
    'sanic-testing>=22.9',
]

setup(
    name='nftregistry',
    version=__version__,
    description='Deterministic non-fungible asset registry with pluggable storage drivers.',
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=requirements,
    extras_require={
        'test': test_requirements,
    },
    classifiers=[
        'Programming Language :: Python :: 3',
    ],
    python_requires='>=3.8',
    zip_safe=True,
    include_package_data=True,
)
