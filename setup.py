"""Setup script for the CAUTI/VAP checklist service following Cosmic Python pattern."""

from setuptools import setup, find_namespace_packages

setup(
    name="cauti-vap-checklist",
    version="1.0.0",
    description="CAUTI/VAP infection-prevention checklist recording and compliance analytics",
    author="Infection Prevention Team",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["checklist*"]),
    py_modules=["config"],
    python_requires=">=3.11",
    install_requires=[
        "fastapi",
        "uvicorn[standard]",
        "pydantic>=2",
        "sqlalchemy>=2.0",
        "psycopg2-binary",
        "python-dotenv",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-cov",
            "httpx",
        ],
        "dev": [
            "black",
            "flake8",
            "mypy",
            "pre-commit",
        ],
    },
    entry_points={
        "console_scripts": [
            "checklist-api=checklist.entrypoints.checklist_api:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Healthcare Industry",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.11",
        "Topic :: Scientific/Engineering :: Medical Science Apps.",
    ],
)
