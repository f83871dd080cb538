from setuptools import setup, find_packages

setup(
    name="dashboard_assistant",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={
        "dashboard_assistant": ["services/*.yaml"],
    },
    python_requires=">=3.9",
    install_requires=[
        "fastapi",
        "uvicorn",
        "httpx",
        "openai>=1.0",
        "pydantic>=2",
        "python-dotenv",
        "pyyaml"
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
        ],
    },
)
