import itertools
import re
import os

from setuptools import find_packages, setup

dependencies = ["marshmallow_dataclass[enum]", "marshmallow", "methodtools"]

with open(os.path.join(os.path.dirname(__file__), "gffcombine", "__init__.py")) as v_file:
    VERSION = re.compile(r""".*__version__ = ["'](.*?)['"]""", re.S).match(v_file.read()).group(1)

extra_dependencies = {
    "io": ["gffutils"],
    "test": ["black", "flake8", "gffutils", "pytest", "pytest-cov"],
}

all_dependencies = list(itertools.chain.from_iterable(extra_dependencies.values()))
extra_dependencies["all"] = all_dependencies

setup(
    name="gffcombine",
    description="Assemble flat GFF3 and GTF records into hierarchical transcript models.",
    long_description="Assemble flat GFF3 and GTF records into hierarchical transcript models for display.",
    long_description_content_type="text/markdown",
    packages=find_packages(include=["gffcombine", "gffcombine.*"]),
    include_package_data=True,
    tests_require=extra_dependencies["test"],
    extras_require=extra_dependencies,
    install_requires=dependencies,
    version=VERSION,
    python_requires=">=3.7",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
