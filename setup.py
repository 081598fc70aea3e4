import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="deuxdir",
    version="2.0",
    author="George Flanagin",
    author_email="me+undeux@georgeflanagin.com",
    description="Find files with identical content across directory trees.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/georgeflanagin/undeux",
    py_modules=[
        "calchashes",
        "deuxdecorators",
        "deuxdir",
        "deuxlib",
        "deuxlogger",
        "fileclass",
        "fsgenerators",
        "hash",
        "help",
        "report",
        "scanerrors",
    ],
    python_requires=">=3.11",
    install_requires=["xxhash"],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["deuxdir=deuxdir:main"]},
    classifiers=[
        "Programming Language :: Python :: 3.11",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Topic :: System :: Filesystems",
        "Topic :: Utilities"
    ],
)
