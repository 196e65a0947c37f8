from setuptools import setup, find_packages
from io import open

classifiers = [
    "Development Status :: 3 - Alpha",
    "License :: OSI Approved :: MIT License",
    "Natural Language :: English",
    "Operating System :: OS Independent",
    "Programming Language :: Python",
    "Programming Language :: Python :: 3",
]


with open("README.md", encoding="utf-8") as f:
    long_description = f.read()

with open("requirements.txt", encoding="utf-8") as f:
    requirements = f.readlines()

install_requires = [r.strip() for r in requirements if r.strip()]

with open("randsavings/__init__.py") as f:
    for line in f:
        if line.startswith("__version__"):
            module_version = line.split('"')[1]

setup(
    name="randsavings",
    version=module_version,
    description="A randomized Clarke & Wright savings heuristic for the capacitated vehicle routing problem",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT License",
    platforms="any",
    classifiers=classifiers,
    python_requires=">=3.9",
    packages=find_packages(exclude=["tests", "tests.*"]),
    entry_points={
        'console_scripts': [
            'RandSavings = randsavings.RandSavings:main',
        ],
    },
    include_package_data=True,
    install_requires=install_requires,
    extras_require={
        'test': ['pytest'],
    },
)
