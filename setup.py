from setuptools import find_namespace_packages, setup  # type: ignore[import-unresolved]

setup(
    name="cursor-pagination",
    version="0.1.0",
    packages=find_namespace_packages(
        include=["services.cursor_pagination", "services.cursor_pagination.*"],
        exclude=["services.cursor_pagination.tests"],
    ),
    python_requires=">=3.9",
    install_requires=[
        "pydantic>=2.0",
        "structlog>=23.1.0",
        "fastapi>=0.100.0",
        "sqlalchemy>=2.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "httpx>=0.24",
        ],
    },
    description="JSON:API cursor pagination: page parameter validation, cursor windows and links",
)
