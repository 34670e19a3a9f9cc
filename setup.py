from setuptools import setup, find_packages

setup(
    name="bed",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pyyaml",
        "tqdm>=4.60",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "bed=bed.cli:main",
        ],
    },
    description="A bulk command line text editor: edit every regex match "
                "across many files in one editor session.",
)
