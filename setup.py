# setup.py
from setuptools import setup, find_packages

setup(
    name="sexplug",
    version="0.1.0",
    description="Lazy enumeration of every completion of an s-expression template",
    packages=find_packages(include=["sexplug", "sexplug.*"]),
    python_requires=">=3.9",
    install_requires=[],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["sexplug = sexplug.__main__:main"],
    },
    zip_safe=False,
)
