from setuptools import setup, find_packages

setup(
    name="exactlinalg",
    version="0.1",
    description="Exact rational linear algebra and lattice reduction",
    long_description=("Exact rational numbers, vectors and matrices with zero-copy views and augmented matrices, "
                      "LU decomposition, Gauss-Jordan elimination, Gram-Schmidt orthogonalization and lattice "
                      "basis reduction (LLL, Lagrange-Gauss)"),
    long_description_content_type="text/plain",
    license="Apache License 2.0",
    python_requires=">=3.8",
    packages=find_packages(include=["exactlinalg", "exactlinalg.*"]),
    install_requires=["numpy", "sympy"],
    extras_require={"test": ["pytest", "pytest-timeout"]},
    classifiers=[
        "Intended Audience :: Science/Research", "Development Status :: 3 - Alpha", "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10", "Programming Language :: Python :: 3.11", "Programming Language :: Python :: 3.12",
        "Natural Language :: English", "Operating System :: OS Independent", "Topic :: Scientific/Engineering :: Mathematics"
    ],
    keywords=["rational", "exact arithmetic", "linear algebra", "lattice reduction", "LLL"],
    zip_safe=False,
)
