from setuptools import setup, find_packages


setup(
    name="unitypackage",
    version="0.1",
    packages=find_packages(),
    description="Read, modify, and write Unity .unitypackage archives.",
    author="vercingetorx",
    install_requires=[
        "PyYAML>=6.0",
    ],
    entry_points={
        "console_scripts": [
            "unitypackage=unitypackage.cli:main",
        ]
    },
)
