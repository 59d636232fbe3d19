# setup.py
from setuptools import find_namespace_packages, setup

setup(
    name="skeletree",
    version="1.0.0",
    description="Create directory trees from ASCII tree documents and generate those documents from directories",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["skeletree", "skeletree.*"]),
    package_data={
        "skeletree": ["templates/*.md"],
        "skeletree.interface": ["locales/*.json"],
    },
    include_package_data=True,
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'skeletree=skeletree.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
