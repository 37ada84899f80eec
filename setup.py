# setup.py
import setuptools

with open("README.md", "r") as infile:
    readme_text = infile.read()

setuptools.setup(
    # Package name and version.
    name="rbaffine",
    version="0.1.0",

    # Package description, license, and keywords.
    description="Parameter sets and affine theta expansions "
                "for certified reduced basis methods.",
    license="MIT",
    long_description=readme_text,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "Natural Language :: English",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Topic :: Scientific/Engineering",
        "Intended Audience :: Science/Research",
        "Development Status :: 3 - Alpha",
    ],

    # Technical details: source code, dependencies, test suite.
    packages=setuptools.find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.8",
    install_requires=[
        "h5py>=3.0",
        "numpy>=1.16",
        "scipy>=1.12",
    ],
    extras_require={
        "test": [
            "pytest>=6.0.2",
            "pytest-cov>=2.12.1",
            "flake8>=3.9.0",
        ],
    },
)
