# setup.py
from setuptools import find_namespace_packages, setup

setup(
    name="repath",
    version="0.1.0",
    description="Move Luau modules and rewrite the require() paths that point at them",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["repath", "repath.*"]),
    package_data={"repath.interface": ["locales/*.json"]},
    include_package_data=True,
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'repath=repath.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
