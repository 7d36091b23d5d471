from setuptools import setup, find_packages

setup(
    name="minutes-index",
    version="0.1.0",
    packages=find_packages(include=["minutes_index", "minutes_index.*"]),
    python_requires=">=3.10",
    install_requires=[
        "requests>=2.31.0",
        "beautifulsoup4>=4.12.0",
        "lxml>=4.9.0",
        "click>=8.1.0",
        "pyyaml>=6.0",
        "python-dateutil>=2.8.0",
    ],
    extras_require={
        "test": ["pytest>=7.4.0"],
    },
    entry_points={
        "console_scripts": [
            "minutes-index=minutes_index.cli:cli",
        ],
    },
)
