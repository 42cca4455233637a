"""
Setup script for the Clarifai Tagger package.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read the README file
readme_path = Path(__file__).parent / "README.md"
long_description = readme_path.read_text(encoding="utf-8") if readme_path.exists() else ""

# Read requirements
requirements_path = Path(__file__).parent / "requirements.txt"
requirements = []
if requirements_path.exists():
    requirements = [
        line.strip() 
        for line in requirements_path.read_text().splitlines() 
        if line.strip() and not line.startswith("#")
    ]

setup(
    name="clarifai-tagger",
    version="1.0.0",
    description="Tag local and remote images with concepts from the Clarifai recognition API",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="Clarifai Tagger Team",
    packages=find_packages(include=["clarifai_tagger", "clarifai_tagger.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Graphics",
        "Topic :: Scientific/Engineering :: Artificial Intelligence",
    ],
    python_requires=">=3.11",
    install_requires=requirements,
    extras_require={
        "dev": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "clarifai-tagger=clarifai_tagger.main:main",
        ],
    },
    include_package_data=True,
    zip_safe=False,
    keywords="clarifai, ai, tagging, image-recognition, concepts",
)
