from setuptools import setup, find_packages

setup(
    name="aging-map",
    version="1.0.0",
    description="Thread-safe dictionary whose entries expire after a fixed time-to-live",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    include_package_data=True,
    install_requires=[
        "click>=8.0.0",
        "rich>=13.0.0",
        "pyyaml>=6.0.0",
        "python-json-logger>=3.1.0",
        "prometheus-client>=0.18.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "pytest-cov>=4.0.0",
        ],
        "dev": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "pytest-cov>=4.0.0",
            "black>=23.0.0",
            "flake8>=6.0.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "aging-map=aging_map.cli.main:main",
        ],
    },
    python_requires=">=3.9",
)
