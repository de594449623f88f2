from setuptools import setup, find_packages
from pathlib import Path

# Read the contents of the README file for the long description
here = Path(__file__).parent
long_description = (here / "README.md").read_text(encoding="utf-8")

setup(
    name="exact_money",
    version="0.1.0",
    packages=find_packages(exclude=["tests*"]),
    install_requires=[
        "pydantic-core>=2.23.0",
    ],
    extras_require={
        "dev": ["pytest", "pydantic"],
    },
    description="Exact decimal money arithmetic: scaled-integer amounts, eight rounding modes, lossless allocation, currency conversion and locale-aware formatting.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.10",
)
