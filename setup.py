from setuptools import setup, find_packages

setup(
    name="connect4-solver",
    version="0.1.0",
    packages=find_packages(include=["connect4_solver", "connect4_solver.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "gymnasium",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "connect4-solver=connect4_solver.interfaces.cli:main",
        ],
    },
)
