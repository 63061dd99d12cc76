# setup.py
from setuptools import setup, find_packages

setup(
    name="rank_spider",
    version="0.1.0",
    description="Single-site spider that builds the link graph of the crawled pages",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "click>=8.1",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "rank-spider=rank_spider.cli:main",
        ],
    },
    python_requires=">=3.11",
)
