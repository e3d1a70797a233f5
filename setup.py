# setup.py
from setuptools import setup, find_packages

setup(
    name="schemer",
    version="0.1.0",
    description="A small Scheme with syntax-rules macros and a derived-form prelude",
    packages=find_packages(include=["schemer", "schemer.*"]),
    package_data={"schemer.prelude": ["*.scm"]},
    python_requires=">=3.10",
    install_requires=[],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    zip_safe=False,
)
