from setuptools import setup, find_packages

# Read requirements from requirements.txt
with open('requirements.txt') as f:
    requirements = f.read().splitlines()

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="tile-rects",
    version="0.1.0",
    packages=find_packages(exclude=["tests"]),
    install_requires=requirements,
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "tile-rects=tile_rects.main:main",
        ],
    },
    description="Merge marked tile grid cells into collision rectangles",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",
    keywords="tilemap, collision, rectangles, ldtk, gamedev",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Topic :: Games/Entertainment",
        "Development Status :: 4 - Beta",
    ],
    python_requires=">=3.11",
)
