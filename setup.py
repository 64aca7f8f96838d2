from setuptools import setup, find_packages

setup(
    name="eaip2sql",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "requests>=2.25.1",
        "beautifulsoup4>=4.9.0",
        "sqlalchemy>=2.0.0",
        "python-dateutil>=2.8.1",
    ],
    extras_require={
        "mysql": [
            "pymysql>=1.0.0",
        ],
        "dev": [
            "pytest>=6.0",
            "black>=21.0",
            "mypy>=0.900",
            "flake8>=3.9.0",
        ]
    },
    entry_points={
        "console_scripts": [
            "eaip2sql=eaip2sql.cli:main",
        ],
    },
    description="Generate navigation data for one AIRAC cycle from European eAIP publications",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
    ],
    python_requires=">=3.8",
)
