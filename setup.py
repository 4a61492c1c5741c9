from setuptools import setup, find_packages

setup(
    name="quake-risk",
    version="0.1.0",
    description="Heuristic earthquake risk classifier (similarity-weighted + k-NN blend)",
    packages=find_packages(exclude=["tests"]),
    python_requires=">=3.11",
    install_requires=[
        "numpy>=1.24",
        "pandas>=2.0,<3.0",
        "structlog>=23.1",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
        "parquet": ["pyarrow>=12.0"],
    },
    entry_points={
        "console_scripts": [
            "quake-predict=quake_risk.predict:main",
            "quake-score=quake_risk.score:main",
            "quake-evaluate=quake_risk.risk_classifier.evaluate:main",
        ],
    },
)
