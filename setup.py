# setup.py

from setuptools import setup, find_packages

setup(
    name="SimFrame",
    version="1.0.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    package_data={"simframe.core": ["default.yaml"]},
    install_requires=[
        "numpy",
        "numba",
        "pyyaml",
    ],
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.10",
)
