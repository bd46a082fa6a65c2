"""
Setup script for the institute scheduling service and its shared core.
"""
from setuptools import setup, find_packages

setup(
    name="institute-scheduling",
    version="1.0.0",
    description="Faculty, batch and free-slot scheduling for an institute",
    packages=find_packages(include=["institute_shared", "institute_shared.*", "app", "app.*"]),
    python_requires=">=3.10",
    install_requires=[
        "fastapi>=0.100.0",
        "uvicorn>=0.23.0",
        "pydantic>=2.0.0",
        "sqlalchemy>=2.0.0",
        "psycopg2-binary>=2.9.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "httpx>=0.24.0",
        ],
    },
)
