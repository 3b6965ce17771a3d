from setuptools import find_packages, setup

setup(
    name="blissful-bites-manager",
    version="0.1.0",
    packages=find_packages(exclude=["blissful.tests"]),
    install_requires=[
        "click",
        "SQLAlchemy>=2.0",
        "sqlalchemy-libsql",
        "python-dotenv",
        "openpyxl",
        "textual",
        "rich",
    ],
    extras_require={"dev": ["pytest"]},
    entry_points={
        "console_scripts": [
            "blissful=blissful.cli.main:cli",
        ],
    },
)
