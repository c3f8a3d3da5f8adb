# ================================================================================================
# setup.py - Package Setup
# ================================================================================================

from setuptools import setup, find_packages

setup(
    name="foodlog-detection-service",
    version="1.0.0",
    description="Food Log photo detection: multi-model voting, nutrition lookup and daily journal",
    author="FoodLog Team",
    author_email="team@foodlog.app",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "pydantic>=2.5.0",
        "pydantic-settings>=2.1.0",
        "httpx>=0.25.2",
        "prometheus-client>=0.19.0",
        "structlog>=23.2.0",
        "python-dotenv>=1.0.0"
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.21.0",
            "pytest-cov>=4.1.0",
            "black>=23.7.0",
            "flake8>=6.0.0",
            "mypy>=1.5.0"
        ]
    },
    entry_points={
        "console_scripts": [
            "foodlog-detect=services.detector.main:main"
        ]
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12"
    ]
)
