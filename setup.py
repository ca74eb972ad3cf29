from setuptools import find_packages, setup

setup(
    name="rcslicense",
    version="9.6.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2",
        "cryptography",
        "click",
        "pyyaml",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "rcs-license-gen=rcslicense.cli:cli",
        ],
    },
)
