from setuptools import setup, find_packages


with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="tourmap",
    version="0.1.0",
    description="Routed tour maps: a cached graph of directions between points and static map requests.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    packages=find_packages(exclude=("tests", "tests.*")),
    python_requires=">=3.9",
    install_requires=["requests", "networkx", "PyYAML"],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["tourmap=tourmap.cli:main"]},
)
