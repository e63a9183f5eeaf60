# setup.py
from setuptools import setup, find_packages
import os
import re

# Single source of truth for the version
with open(os.path.join("lispy", "__init__.py")) as f:
    version = re.search(r'__version__ = "(.+)"', f.read()).group(1)

setup(
    name="lispy",
    version=version,
    packages=find_packages(include=["lispy", "lispy.*"]),
    python_requires=">=3.10",
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["lispy = lispy.repl:main"],
    },
    zip_safe=False,
)
