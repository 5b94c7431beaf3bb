# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="cella",
    version="0.1.0",
    description="A minimal Lisp evaluator over cons cells with fexpr-style native operators",
    packages=find_namespace_packages(include=["cella", "cella.*"]),
    python_requires=">=3.10",
    install_requires=[],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["cella = cella.interpreter:main"],
    },
    zip_safe=False,
)
