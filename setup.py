# setup.py
from setuptools import setup, find_packages

setup(
    name="logr",
    version="0.1.0",
    description="Leveled logging to console and rotating, archived log files",
    python_requires=">=3.8",
    package_dir={"": "src"},
    packages=find_packages(where="src"),  # Picks up 'logr' and its subpackages
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'logr-cli=logr.interface.cli.app:main',  # File target maintenance from the shell
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
