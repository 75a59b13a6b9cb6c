"""
EV Trip Planner
Plans charging stops for electric vehicle road trips
"""

from setuptools import setup, find_namespace_packages
import os

# Read the contents of README file
this_directory = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(this_directory, 'README.md'), encoding='utf-8') as f:
    long_description = f.read()

setup(
    name="ev-trip-planner",
    version="1.0.0",
    description="Charging-stop planner for electric vehicle road trips",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_namespace_packages(include=["src", "src.*", "config", "config.*"]),
    python_requires=">=3.8",
    install_requires=[
        "pandas>=1.5.0",
        "requests>=2.28.0",
        "python-dotenv>=1.0.0",
        "pydantic>=2.0.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "ev-trip-plan=src.cli:main",
        ],
    },
    include_package_data=True,
    zip_safe=False,
)
