import re

from setuptools import setup

with open("htmlssr/_version.py") as f:
    _version = re.search(r'__version__ = "([^"]+)"', f.read()).group(1)

setup(
    name="htmlssr",
    version=_version,
    license="MIT",
    description="Server-side rendering of JSX-style element trees to HTML strings.",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    keywords="html jsx ssr python",
    python_requires=">=3.8",
    classifiers=[
        "Intended Audience :: Developers",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: Implementation :: PyPy",
        "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Topic :: Text Processing :: Markup :: HTML",
    ],
    packages=["htmlssr"],
    package_data={
        "htmlssr": ["py.typed"],
    },
    include_package_data=True,
    install_requires=[
        "typing_extensions>=3.10.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=6.2.4",
        ],
    },
)
