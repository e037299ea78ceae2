# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="repogen",
    version="1.0.0",
    description="Generate large synthetic git repositories from a fan-out schedule",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["repogen", "repogen.*"]),
    install_requires=[],
    extras_require={
        "tests": [
            "pytest",
        ],
    },
    entry_points={
        'console_scripts': [
            'repogen=repogen.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
