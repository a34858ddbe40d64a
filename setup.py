import setuptools

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setuptools.setup(
    name="meshcombine",
    version="0.1.0",
    author="tinker495",
    author_email="wjdrbtjr495@gmail.com",
    description="JAX-accelerated combining of separately indexed mesh attribute arrays",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(exclude=("tests", "tests.*")),
    install_requires=[
        "jax>=0.4.0",
        "chex>=0.1.0",
        "absl-py>=1.0.0",
        "numpy>=1.22",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "rich>=12.0.0",
        ],
        "benchmarks": [
            "rich>=12.0.0",
        ],
        "docs": [
            "sphinx>=5.0",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Topic :: Multimedia :: Graphics :: 3D Modeling",
    ],
    python_requires=">=3.9",
)
