from setuptools import setup, find_packages

setup(
    name="rotation-tracker",
    version="0.1.0",
    description="Live basketball rotation tracker: stints, quintets, plus/minus and undo",
    author="Ben Rosen",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "numpy>=1.22.4",
        "pandas>=1.5.3",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "rotation-tracker=rotation_tracker.main:main",
        ],
    },
)
