from setuptools import find_packages, setup

setup(
    name="kiro-proxy",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "fastapi>=0.110",
        "httpx>=0.27",
        "pydantic>=2.5",
        "PyYAML>=6.0",
        "structlog>=24.1",
        "uvicorn>=0.29",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
            "pytest-httpx>=0.30",
        ],
    },
    entry_points={
        "console_scripts": [
            "kiro-proxy=kiro_proxy.core.cli:main",
        ],
    },
    description="OpenAI-compatible chat completion proxy for the Kiro assistant backend.",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.10",
)
