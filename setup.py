"""
Setup script for the JSON to tiny converter.
"""
from setuptools import setup, find_packages

setup(
    name="json-tiny",
    version="1.0.0",
    description="Convert JSON arrays of objects into the token-compact tiny format",
    author="Your Name",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["config", "main", "count_tokens"],
    install_requires=[
        "tiktoken>=0.7.0",
        "requests>=2.31.0",
        "tenacity>=8.2.3",
        "python-dotenv>=1.0.0",
        "tqdm>=4.66.1",
    ],
    extras_require={
        "test": ["pytest>=7.4.0"],
    },
    entry_points={
        "console_scripts": [
            "json-tiny=main:run",
            "json-tiny-count=count_tokens:run",
        ],
    },
    python_requires=">=3.8",
)
