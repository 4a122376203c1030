"""
/setup.py

Youden plot computations and reporting helpers.
"""

import setuptools

with open("requirements.txt", "r", encoding="utf-8") as file:
    requirements = file.read().splitlines()

setuptools.setup(
    name="youdenplot",
    version="0.1.0",
    description="Youden plots for inter-laboratory measurement comparison",
    package_dir={"": "src"},
    packages=setuptools.find_packages(where="src"),
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.10",
    install_requires=requirements,
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "youdenplot = youden_report.cli:main",
        ]
    },
)
