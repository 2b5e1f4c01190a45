from setuptools import setup, find_packages

setup(
    name="calltap",
    version="0.1.0",
    description="Record the live audio of an outbound VAPI call to WAV files",
    author="",
    python_requires=">=3.8",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "aiohttp>=3.8.0",
        "rich>=12.5.0",
        "pyyaml>=6.0.0",
        "pypubsub>=4.0.3",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "numpy>=1.21.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "calltap=calltap.main:main",
        ],
    },
)
