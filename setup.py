#! python Setup.py

from setuptools import setup, find_packages

TEST_REQS = [
    "pytest",
    "pytest-cov",
]

setup(
    name="genedensity",
    version="1.0.0",
    author="Ritchie Lab",
    author_email="Software_RitchieLab@pennmedicine.upenn.edu",
    url="https://ritchielab.org",
    description="Gene density and chromosome statistics for EnsEMBL-style databases",  # noqa E501
    packages=find_packages(
        include=[
            "genedensity",
            "genedensity.*",
        ]
    ),
    install_requires=[
        "SQLAlchemy>=2.0",
        "click>=8.1",
        "colorama>=0.4",
        "pandas>=2.0",
    ],
    extras_require={
        "test": TEST_REQS,
    },
    python_requires=">=3.11",
    include_package_data=True,
    package_data={
        "genedensity.density": ["gene_types.json"],
        "genedensity.db": ["seed/*.json"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    entry_points={
        "console_scripts": [
            "genedensity=genedensity.utils.main_cli:main",
        ],
    },
)
