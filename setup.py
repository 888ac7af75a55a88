from setuptools import setup, find_packages

setup(
    name="nba_mvp_predictor",
    version="1.0.0",
    description="NBA MVP award-share prediction: regression model bank with season-level MVP evaluation",
    author="NBA Algorithm Team",
    author_email="info@example.com",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "pandas",
        "numpy",
        "scikit-learn",
        "joblib",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        'console_scripts': [
            'mvp-predict=mvp_predictor.scripts.main:main',
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
    ],
)
