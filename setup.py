"""
Setup script for the PDF render service.

Allows development installation with `pip install -e .[test]`
"""

from setuptools import setup, find_packages

setup(
    name="pdf-render-service",
    version="0.1.0",
    packages=find_packages(include=["pdf_render", "pdf_render.*"]),
    python_requires=">=3.11",
    install_requires=[
        "playwright>=1.40",
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
        "fastapi>=0.104",
        "uvicorn>=0.24",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.21",
            "httpx>=0.25",
        ],
    },
)
