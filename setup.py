from setuptools import setup, find_packages

setup(
    name="mentorhub",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "fastapi",
        "uvicorn",
        "sqlalchemy>=1.4",
        "psycopg2-binary",
        "python-jose[cryptography]",
        "passlib[bcrypt]",
        "bcrypt<4.1",  # passlib reads bcrypt.__about__, removed in 4.1
        "pydantic[email]>=2",
        "pydantic-settings",
        "python-dotenv",
    ],
    extras_require={
        "test": [
            "pytest",
            "httpx",
        ],
    },
)
