import os.path

from setuptools import setup, find_packages


def readme():
    path = os.path.join(os.path.dirname(__file__), 'README.rst')
    with open(path, 'r') as rfile:
        return rfile.read()


setup(
    name="txTwitCall",
    version="0.1.0",
    license='MIT',
    description=(
        "A Twisted-based client for REST APIs described by a table of"
        " resource declarations, with Twitter's API v1.1 built in."),
    long_description=readme(),
    packages=find_packages(),
    include_package_data=True,
    install_requires=['Twisted[tls]>=16.0.0', 'oauthlib', 'pyOpenSSL'],
    python_requires='>=3.6',
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Framework :: Twisted',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Topic :: Software Development :: Libraries :: Python Modules',
    ],
)
