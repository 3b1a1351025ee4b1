from setuptools import setup, find_packages

setup(
    name="galeria-client",
    version="0.1.0",
    packages=find_packages(),
    install_requires=["httpx>=0.26.0"],
    entry_points={
        "console_scripts": [
            "galeria=galeria_client.cli:main",
        ],
    },
)
