# setup.py
from setuptools import setup, find_packages

setup(
    name="iku",
    version="0.1.0",
    description="Tokenizer, parser and tree-walking interpreter for the iku scripting language",
    packages=find_packages(include=["iku", "iku.*"]),
    python_requires=">=3.10",
    install_requires=[],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    zip_safe=False,
)
