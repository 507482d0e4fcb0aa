from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="smart-context",
    version="1.0.10",
    author="Brian Petro",
    description="A CLI tool to copy folder contents to the clipboard as full, minified or skeleton context",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/brianpetro/smart-context-vscode",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "pyperclip==1.9.0",
        "rich>=13.0",
        "structlog>=24.1",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.9",
    license="MIT",
    entry_points={
        "console_scripts": [
            "smart-context=smartcontext.main:main",
        ],
    },
)
