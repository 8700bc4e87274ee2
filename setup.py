from setuptools import setup, find_packages

setup(
    name="checkbill",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "sqlalchemy>=2.0",
        "psycopg2-binary",
        "python-dotenv",
        "pydantic",
        "pydantic-settings",
        "python-dateutil",
        "tzdata",
        "celery",
        "prometheus-client",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
)
