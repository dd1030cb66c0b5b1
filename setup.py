from setuptools import setup, find_packages

setup(
    name="year-pack",
    version="0.1.0",
    description="Sanitized year-in-review analytics for AI assistant chat history",
    author="Your Name",
    package_dir={"": "src"},
    packages=find_packages("src"),
    install_requires=[
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
        "structlog>=23.1",
        "numpy>=1.24",
        "python-dateutil>=2.9",
        "typer>=0.9",
        "rich>=13.0",
        "python-dotenv>=1.0",
        "pyyaml>=6.0"
    ],
    extras_require={
        "test": ["pytest>=7.4"]
    },
    entry_points={
        "console_scripts": [
            "year-pack=year_pack.cli:app"
        ]
    },
    python_requires=">=3.10",
    include_package_data=True,
)
